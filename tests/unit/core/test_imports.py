"""Unit tests for core/imports.py and ImportEntry"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from mdgen.core.errors import InvalidInputError
from mdgen.core.imports import applicable, import_names
from mdgen.core.models import ImportEntry, scan_imports


# --- ImportEntry ---

def test_scan_imports_directive_forms():
    """Directives allow leading whitespace, a static qualifier, and trailing content."""
    text = (
        "@using System.Text\n"
        "   @using   MyApp.Shared;  // comment\n"
        "@using static System.Math\n"
        "@inject Foo Bar\n"
        "not @using Ignored\n"
        "@usingX Nope\n"
    )
    assert scan_imports(text) == ("System.Text", "MyApp.Shared", "static System.Math")


def test_scan_imports_dedupes():
    """Repeated directives produce one name."""
    assert scan_imports("@using A\n@using A;\n") == ("A",)


def test_import_entry_names_computed_at_construction():
    """names is populated eagerly and stable across accesses."""
    entry = ImportEntry(path="/a/_Imports.razor", text="@using A\n")
    assert entry.names == ("A",)
    assert entry.names is entry.names


def test_import_entry_equality_is_path_and_text():
    """Entries are equal iff path and text are equal."""
    a = ImportEntry(path="/a/_Imports.razor", text="@using A\n")
    assert a == ImportEntry(path="/a/_Imports.razor", text="@using A\n")
    assert a != ImportEntry(path="/a/_Imports.razor", text="@using B\n")
    assert a != ImportEntry(path="/b/_Imports.razor", text="@using A\n")
    assert hash(a) == hash(ImportEntry(path="/a/_Imports.razor", text="@using A\n"))


def test_import_entry_concurrent_reads_agree():
    """Concurrent readers of a shared entry see identical names."""
    entry = ImportEntry(path="/a/_Imports.razor", text="\n".join(f"@using N{i}" for i in range(200)))
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: entry.names, range(32)))
    assert all(r == results[0] for r in results)
    assert len(results[0]) == 200


def test_import_entry_directory():
    """An entry governs the directory that contains it."""
    assert ImportEntry(path="C:\\proj\\Pages\\_Imports.razor", text="").directory == "C//proj/Pages"


# --- applicable ---

def _entries():
    return {
        "A": ImportEntry(path="/A/_Imports.razor", text="@using FromA\n"),
        "AB": ImportEntry(path="/A/B/_Imports.razor", text="@using FromAB\n"),
        "C": ImportEntry(path="/C/_Imports.razor", text="@using FromC\n"),
    }


def test_applicable_cascades_from_ancestors():
    """A document receives entries from every ancestor directory, never siblings."""
    e = _entries()
    result = applicable(e.values(), "/A/B/D.md")
    assert set(result) == {e["A"], e["AB"]}
    assert import_names(result) == ["FromA", "FromAB"]


def test_applicable_parent_only():
    """A document at /A gets only the /A entry."""
    e = _entries()
    assert applicable(e.values(), "/A/D.md") == [e["A"]]


def test_applicable_case_insensitive():
    """Directory comparison ignores case."""
    e = _entries()
    assert set(applicable(e.values(), "/a/b/D.md")) == {e["A"], e["AB"]}


def test_applicable_respects_segment_boundaries():
    """An entry at /A does not govern the sibling directory /AB."""
    e = _entries()
    assert applicable(e.values(), "/AB/D.md") == []


def test_applicable_mixed_separators():
    """Windows-style document paths match '/'-declared entries."""
    e = _entries()
    assert set(applicable(e.values(), "\\A\\B\\D.md")) == {e["A"], e["AB"]}


@pytest.mark.parametrize("path", ["", "/"])
def test_applicable_invalid_path(path):
    """A path without a containing directory is an invalid-input error naming the path."""
    with pytest.raises(InvalidInputError) as exc:
        applicable(_entries().values(), path)
    assert exc.value.path == path


# --- import_names ---

def test_import_names_union_sorted():
    """import_names unions, de-duplicates and sorts, ignoring blank extras."""
    entries = [
        ImportEntry(path="/x/_Imports.razor", text="@using B\n@using A\n"),
        ImportEntry(path="/x/y/_Imports.razor", text="@using A\n"),
    ]
    assert import_names(entries, ["C", "B", " "]) == ["A", "B", "C"]


def test_import_names_order_independent():
    """Entry order does not change the result."""
    e = list(_entries().values())
    assert import_names(e) == import_names(list(reversed(e)))
