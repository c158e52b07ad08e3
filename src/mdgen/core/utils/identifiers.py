"""Identifier sanitization for generated C# type and namespace names"""

import unicodedata


LETTER_CATEGORIES = frozenset({'Lu', 'Ll', 'Lt', 'Lm', 'Lo', 'Nl'})
PART_CATEGORIES = LETTER_CATEGORIES | {'Mn', 'Mc', 'Nd', 'Pc'}

RESERVED_WORDS = frozenset({
    # reserved
    'abstract', 'as', 'base', 'bool', 'break', 'byte', 'case', 'catch', 'char',
    'checked', 'class', 'const', 'continue', 'decimal', 'default', 'delegate',
    'do', 'double', 'else', 'enum', 'event', 'explicit', 'extern', 'false',
    'finally', 'fixed', 'float', 'for', 'foreach', 'goto', 'if', 'implicit',
    'in', 'int', 'interface', 'internal', 'is', 'lock', 'long', 'namespace',
    'new', 'null', 'object', 'operator', 'out', 'override', 'params',
    'private', 'protected', 'public', 'readonly', 'ref', 'return', 'sbyte',
    'sealed', 'short', 'sizeof', 'stackalloc', 'static', 'string', 'struct',
    'switch', 'this', 'throw', 'true', 'try', 'typeof', 'uint', 'ulong',
    'unchecked', 'unsafe', 'ushort', 'using', 'virtual', 'void', 'volatile',
    'while',
    # contextual
    'add', 'alias', 'and', 'ascending', 'args', 'async', 'await', 'by',
    'descending', 'dynamic', 'equals', 'file', 'from', 'get', 'global',
    'group', 'init', 'into', 'join', 'let', 'managed', 'nameof', 'nint',
    'not', 'notnull', 'nuint', 'on', 'or', 'orderby', 'partial', 'record',
    'remove', 'required', 'scoped', 'select', 'set', 'unmanaged', 'value',
    'var', 'when', 'where', 'with', 'yield',
})


def _is_start(ch: str) -> bool:
    return ch == '_' or unicodedata.category(ch) in LETTER_CATEGORIES


def _is_part(ch: str) -> bool:
    return ch == '_' or unicodedata.category(ch) in PART_CATEGORIES


def sanitize(name: str) -> str:
    """Map an arbitrary string to a valid identifier; '' stays ''.

    A leading decimal digit gets an '_' prefix, any other invalid leading char
    becomes '_', every remaining invalid char becomes '_', and a result equal to
    a keyword gets a trailing '_'. No case folding is applied.
    """
    if not name:
        return name
    if unicodedata.category(name[0]) == 'Nd':
        name = '_' + name
    if not _is_start(name[0]):
        name = '_' + name[1:]
    name = ''.join(ch if _is_part(ch) else '_' for ch in name)
    if name in RESERVED_WORDS:
        name += '_'
    return name
