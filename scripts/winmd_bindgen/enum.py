"""
Enum and constant generation module

Generates Odin enums and the global constants of the Apis class.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen, strip_enum_prefix
from .errors import MetadataError
from .ir import GuidType, ValueType
from .types import PLATFORM_MODULE

if TYPE_CHECKING:
    from .ir import EnumInfo, FieldInfo, Guid

INTEGER_CONSTANT_KINDS = {'Int32', 'UInt32'}
FLOAT_CONSTANT_KINDS = {'Single'}


def guid_literal(guid: 'Guid') -> str:
    """Odin compound literal for a GUID, pointing at a win32.IID"""
    data4 = ', '.join(f'0x{b:02x}' for b in guid.data4)
    return f'&{PLATFORM_MODULE}.IID{{0x{guid.data1:08x}, 0x{guid.data2:04x}, 0x{guid.data3:04x}, {{{data4}}}}}'


class EnumGenerator:
    """Generates enum and constant declarations"""

    def generate(self, enum: 'EnumInfo', gen: CodeGen):
        """Generate an enum declaration"""
        with gen.block(f'{enum.name} :: enum {{'):
            for item in enum.items:
                gen.line(f'{strip_enum_prefix(enum.name, item.name)} = {item.value},')

    def generate_const(self, field: 'FieldInfo', gen: CodeGen):
        """Generate a global constant"""
        name = field.name

        if isinstance(field.type, GuidType):
            if field.guid is None:
                raise MetadataError(f'GUID constant {name} has no GuidAttribute')
            gen.line(f'{name} := {guid_literal(field.guid)}')
            return

        if field.constant is None:
            raise MetadataError(f'field {name} has no constant value')
        kind = field.constant.kind
        value = field.constant.value

        if isinstance(field.type, ValueType) and field.type.name == 'HRESULT':
            # Failure codes don't fit in i32 as positive literals
            gen.line(f'{name} :: transmute({PLATFORM_MODULE}.HRESULT)u32(0x{int(value) & 0xFFFFFFFF:08x})')
        elif kind in INTEGER_CONSTANT_KINDS:
            gen.line(f'{name} :: {int(value)}')
        elif kind in FLOAT_CONSTANT_KINDS:
            gen.line(f'{name} :: {float(value)!r}')
        else:
            raise MetadataError(f'unsupported constant {name} of kind {kind}')
