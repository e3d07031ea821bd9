"""
Code generation utilities

Provides an indenting line buffer and Odin naming helpers.
"""

# Odin keywords, plus identifiers that shadow commonly used built-ins
ODIN_RESERVED = {
    'asm', 'auto_cast', 'bit_field', 'bit_set', 'break', 'case', 'cast',
    'context', 'continue', 'defer', 'distinct', 'do', 'dynamic', 'else',
    'enum', 'fallthrough', 'for', 'foreign', 'if', 'import', 'in', 'map',
    'matrix', 'not_in', 'or_break', 'or_continue', 'or_else', 'or_return',
    'package', 'proc', 'return', 'string', 'struct', 'switch', 'transmute',
    'typeid', 'union', 'using', 'when', 'where',
}


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = '\t'

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def raw(self, text: str):
        """Add raw text without indentation processing"""
        self._lines.append(text)

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines) + '\n'


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


def sanitize_name(name: str) -> str:
    """Make a field or parameter name usable as an Odin identifier

    Examples:
        context -> _context
        matrix -> _matrix
        fontFace -> fontFace
    """
    if name in ODIN_RESERVED:
        return '_' + name
    return name


def strip_enum_prefix(enum_name: str, item_name: str) -> str:
    """Drop the redundant enum name prefix from an enum member

    Examples:
        (DWRITE_FONT_WEIGHT, DWRITE_FONT_WEIGHT_BOLD) -> BOLD
        (D2D1_TEXT_ANTIALIAS_MODE, 2D) -> _2D
    """
    result = item_name
    prefix = enum_name + '_'
    if result.startswith(prefix):
        result = result[len(prefix):]
    if result and '0' <= result[0] <= '9':
        result = '_' + result
    return result


def format_params(params: list[tuple[str, str]]) -> str:
    """Join (name, type) pairs into an Odin parameter list"""
    return ', '.join(f'{name}: {type_str}' for name, type_str in params)


def short_name(odin_name: str) -> str:
    """Strip the package qualifier from an Odin name

    Examples:
        win32.IUnknown -> IUnknown
        ID2D1Resource -> ID2D1Resource
    """
    return odin_name[odin_name.rfind('.') + 1:]
