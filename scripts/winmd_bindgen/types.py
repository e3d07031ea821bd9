"""
Type mapping module

Converts metadata type references into Odin type expressions.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import TypeMappingError
from .ir import (
    MetadataType, VoidType, GuidType, PrimitiveType, PointerType,
    ArrayType, ValueType, InterfaceType,
)

PLATFORM_MODULE = 'win32'

# Types that already exist in core:sys/windows
PLATFORM_NAMES = [
    'IUnknown', 'IStream',
    'HRESULT', 'HANDLE', 'HDC', 'HMONITOR', 'HWND',
    'BOOL', 'RECT', 'POINT', 'SIZE', 'COLORREF',
    'FILETIME', 'LOGFONTW',
]

PRIMITIVE_NAMES = {
    'SByte': 'i8',
    'Byte': 'u8',
    'Int16': 'i16',
    'UInt16': 'u16',
    'Int32': 'i32',
    'UInt32': 'u32',
    'Int64': 'i64',
    'UInt64': 'u64',
    'Single': 'f32',
    'Double': 'f64',
}

STRING_HANDLES = {
    'PWSTR': f'^{PLATFORM_MODULE}.WCHAR',
    'PSTR': f'^{PLATFORM_MODULE}.CHAR',
}

NO_TYPE = ''


@dataclass(frozen=True)
class PrefixRedirect:
    """Sends names with a given prefix to a sibling bindings package

    IDXGISurface with PrefixRedirect('IDXGI', 'dxgi', 'I') -> dxgi.ISurface
    """
    prefix: str
    module: str
    replacement: str = ''

    def apply(self, name: str) -> Optional[str]:
        if not name.startswith(self.prefix):
            return None
        return f'{self.module}.{self.replacement}{name[len(self.prefix):]}'


PREFIX_REDIRECTS = [
    PrefixRedirect('IDXGI', 'dxgi', 'I'),
    PrefixRedirect('DXGI_', 'dxgi'),
    PrefixRedirect('D3D_', 'd3d11'),
]


class TypeMapper:
    """Maps metadata types to Odin"""

    def __init__(self, platform_names: Optional[list[str]] = None,
                 redirects: Optional[list[PrefixRedirect]] = None):
        self.platform_names = set(PLATFORM_NAMES if platform_names is None else platform_names)
        self.redirects = list(PREFIX_REDIRECTS if redirects is None else redirects)

    def odin_name(self, name: str) -> str:
        """Get the Odin name of a struct, enum or interface"""
        if name in self.platform_names:
            return f'{PLATFORM_MODULE}.{name}'
        for redirect in self.redirects:
            mapped = redirect.apply(name)
            if mapped is not None:
                return mapped
        return name

    def map(self, t: MetadataType) -> str:
        """Get the Odin type expression for a metadata type ('' for void)"""
        if isinstance(t, VoidType):
            return NO_TYPE

        if isinstance(t, GuidType):
            return f'{PLATFORM_MODULE}.GUID'

        if isinstance(t, ValueType) and t.name in STRING_HANDLES:
            return STRING_HANDLES[t.name]

        if isinstance(t, PrimitiveType):
            if t.kind not in PRIMITIVE_NAMES:
                raise TypeMappingError(f'unsupported primitive type: {t.kind}')
            return PRIMITIVE_NAMES[t.kind]

        if isinstance(t, PointerType):
            if isinstance(t.element, VoidType):
                return 'rawptr'
            return '^' + self.map(t.element)

        if isinstance(t, ValueType):
            return self.odin_name(t.name)

        # COM interfaces are only ever used through a pointer
        if isinstance(t, InterfaceType):
            return '^' + self.odin_name(t.name)

        if isinstance(t, ArrayType):
            raise TypeMappingError('arrays are only supported as struct fields')
        raise TypeMappingError(f'cannot map type: {t!r}')

    def map_element(self, t: ArrayType) -> str:
        """Get the Odin element type of an inline array"""
        return self.map(t.element)
