"""
Struct generation module

Generates Odin structs, raw unions and bit_field groups with the same memory
layout as the native declarations.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen, sanitize_name
from .errors import LayoutError
from .ir import ArrayType, PrimitiveType

if TYPE_CHECKING:
    from .ir import StructInfo, FieldInfo
    from .types import TypeMapper

BITFIELD_STORAGE_NAME = '_bitfield'


def struct_keyword(struct: 'StructInfo') -> str:
    return 'struct #raw_union' if struct.is_union else 'struct'


class StructGenerator:
    """Generates struct declarations"""

    def __init__(self, type_mapper: 'TypeMapper'):
        self.type_mapper = type_mapper

    def generate(self, struct: 'StructInfo', gen: CodeGen):
        """Generate a top-level struct declaration"""
        with gen.block(f'{struct.name} :: {struct_keyword(struct)} {{'):
            for field in struct.fields:
                self.generate_field(field, gen)

    def generate_field(self, field: 'FieldInfo', gen: CodeGen):
        """Generate one field (recursing into inline nested types)"""
        name = sanitize_name(field.name)

        if isinstance(field.type, ArrayType):
            gen.line(f'{name}: {self._array_type(field)},')
            return

        if field.nested is not None:
            with gen.block(f'{name}: {struct_keyword(field.nested)} {{', '},'):
                for nested_field in field.nested.fields:
                    self.generate_field(nested_field, gen)
            return

        if field.bitfields:
            self._gen_bitfield(field, gen)
            return

        gen.line(f'{name}: {self.type_mapper.map(field.type)},')

    def _array_type(self, field: 'FieldInfo') -> str:
        array = field.type
        if len(array.dimensions) != 1:
            raise LayoutError(f'{field.name}: {len(array.dimensions)}-dimensional arrays are not supported')
        dim = array.dimensions[0]
        if dim.lower_bound != 0:
            raise LayoutError(f'{field.name}: array lower bound must be 0, got {dim.lower_bound}')
        return f'[{dim.length}]{self.type_mapper.map_element(array)}'

    def _gen_bitfield(self, field: 'FieldInfo', gen: CodeGen):
        """Generate a bit_field group over the storage field's integer type"""
        if field.name != BITFIELD_STORAGE_NAME:
            raise LayoutError(f'bitfield storage must be named {BITFIELD_STORAGE_NAME}, got {field.name}')
        if not isinstance(field.type, PrimitiveType) or not field.type.is_integer:
            raise LayoutError(f'bitfield storage {field.name} is not an integer')

        total_size = field.type.width
        field_type = self.type_mapper.map(field.type)
        next_offset = 0

        with gen.block(f'using bitfield: bit_field {field_type} {{', '},'):
            for bitfield in sorted(field.bitfields, key=lambda b: b.offset):
                if bitfield.offset != next_offset:
                    raise LayoutError(
                        f'bitfield {bitfield.name} starts at bit {bitfield.offset}, expected {next_offset}')
                if bitfield.offset + bitfield.length > total_size:
                    raise LayoutError(
                        f'bitfield {bitfield.name} ends at bit {bitfield.offset + bitfield.length}, '
                        f'past the {total_size}-bit storage')
                next_offset = bitfield.offset + bitfield.length
                gen.line(f'{bitfield.name}: {field_type} | {bitfield.length},')
