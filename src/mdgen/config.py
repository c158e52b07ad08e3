"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from mdgen.core.models import ProjectConfig


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:          str = "mdgen"
    db_url:            str = "sqlite:///mdgen.db"
    root_namespace:    str = Field(default="", description="Namespace prefix for every generated component")
    project_root:      str = Field(default="", description="Root for relative namespaces and unit names; '' = build path")
    default_base_type: str = Field(default="", description="Base class when a document sets none; '' = ComponentBase")
    imports_file:      str = Field(default="_Imports.razor", description="File name of ambient import declarations")
    output_dir:        str = Field(default="generated", description="Directory for generated .g.cs files")
    parser_config:     str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    mode:              str = Field(default="full", pattern="^(full|declaration)$", description="full or declaration")
    max_workers:       int = Field(default=4, ge=1, description="Parallel generation threads")

    def project_config(self, root: Optional[Path] = None) -> ProjectConfig:
        """Build the ProjectConfig with an absolute project root; unset falls back to root when given."""
        root_path = Path(self.project_root) if self.project_root else root
        return ProjectConfig(
            root_namespace=self.root_namespace,
            project_root=str(root_path.resolve()) if root_path is not None else "",
            default_base_type=self.default_base_type,
        )


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDGEN_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDGEN_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
