"""
ABI fixup policy

MSVC returns structs from COM methods through a hidden pointer that comes
*after* `this`, while a plain C function with the same signature receives it
first. Declaring the out pointer explicitly keeps both sides in agreement.
See https://blog.airesoft.co.uk/2014/12/direct2d-scene-of-the-accident/
"""

from dataclasses import dataclass

from .errors import AbiFixupError
from .ir import MethodInfo, MetadataType, PrimitiveType, ValueType, is_value_type
from .types import TypeMapper, NO_TYPE, PLATFORM_MODULE

RETURN_PARAM_NAME = '_return'

# Handle-like structs that come back in a register
REGISTER_RETURN_TYPES = {
    f'{PLATFORM_MODULE}.{name}'
    for name in ('HRESULT', 'HANDLE', 'HMONITOR', 'HDC', 'HWND', 'BOOL')
}


@dataclass(frozen=True)
class ReturnFixup:
    """How a method's return value is declared"""
    return_type: str  # NO_TYPE when returned through out_param
    out_param: tuple[str, str] = ()

    @property
    def is_fixed(self) -> bool:
        return bool(self.out_param)


def is_return_type_fix_needed(ret_type: MetadataType, mapper: TypeMapper) -> bool:
    """Check if a return type must be turned into an out parameter"""
    if mapper.map(ret_type) in REGISTER_RETURN_TYPES:
        return False
    if not is_value_type(ret_type) or isinstance(ret_type, PrimitiveType):
        return False
    return not (isinstance(ret_type, ValueType) and ret_type.is_enum)


def fix_return_type(method: MethodInfo, mapper: TypeMapper, owner: str = '') -> ReturnFixup:
    """Get the declared return of an interface method"""
    return_type = mapper.map(method.return_type)
    if not is_return_type_fix_needed(method.return_type, mapper):
        return ReturnFixup(return_type)
    # TODO: thread the out pointer past existing parameters once a method needs it
    if method.params:
        qualified = f'{owner}.{method.name}' if owner else method.name
        raise AbiFixupError(
            f'{qualified} returns {return_type} by value and takes {len(method.params)} parameter(s)')
    return ReturnFixup(NO_TYPE, (RETURN_PARAM_NAME, '^' + return_type))
