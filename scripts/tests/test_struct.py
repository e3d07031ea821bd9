import pytest

from winmd_bindgen import StructGenerator, LayoutError
from winmd_bindgen.ir import (
    StructInfo, FieldInfo, BitfieldInfo,
    PrimitiveType, PointerType, ArrayType, ArrayDimension, ValueType, InterfaceType,
)


def emit(mapper, gen, struct):
    StructGenerator(mapper).generate(struct, gen)
    return gen.output()


def u32(name, offset=-1):
    return FieldInfo(name, PrimitiveType('UInt32'), offset=offset)


def test_plain_struct(mapper, gen):
    out = emit(mapper, gen, StructInfo('D2D1_BRUSH_PROPERTIES', [
        FieldInfo('opacity', PrimitiveType('Single')),
        FieldInfo('transform', ValueType('D2D_MATRIX_3X2_F')),
        FieldInfo('factory', InterfaceType('ID2D1Factory')),
        FieldInfo('name', PointerType(PrimitiveType('UInt16'))),
    ]))
    assert out == (
        'D2D1_BRUSH_PROPERTIES :: struct {\n'
        '\topacity: f32,\n'
        '\ttransform: D2D_MATRIX_3X2_F,\n'
        '\tfactory: ^ID2D1Factory,\n'
        '\tname: ^u16,\n'
        '}\n'
    )


def test_reserved_field_names(mapper, gen):
    out = emit(mapper, gen, StructInfo('S', [u32('context'), u32('matrix')]))
    assert '\t_context: u32,' in out
    assert '\t_matrix: u32,' in out


def test_nested_fields_at_offset_zero_become_union(mapper, gen):
    nested = StructInfo('_Anonymous_e__Union', [u32('a', 0), FieldInfo('b', PrimitiveType('Single'), offset=0)])
    out = emit(mapper, gen, StructInfo('S', [FieldInfo('Anonymous', ValueType('_Anonymous_e__Union'), nested=nested)]))
    assert out == (
        'S :: struct {\n'
        '\tAnonymous: struct #raw_union {\n'
        '\t\ta: u32,\n'
        '\t\tb: f32,\n'
        '\t},\n'
        '}\n'
    )


def test_nested_fields_at_distinct_offsets_stay_struct(mapper, gen):
    nested = StructInfo('_Anonymous_e__Struct', [u32('a', 0), u32('b', 4)])
    out = emit(mapper, gen, StructInfo('S', [FieldInfo('Anonymous', ValueType('_Anonymous_e__Struct'), nested=nested)]))
    assert '\tAnonymous: struct {\n' in out
    assert '#raw_union' not in out


def test_single_nested_field_is_not_union(mapper, gen):
    nested = StructInfo('_Anonymous_e__Union', [u32('a', 0)])
    out = emit(mapper, gen, StructInfo('S', [FieldInfo('Anonymous', ValueType('_Anonymous_e__Union'), nested=nested)]))
    assert '#raw_union' not in out


def test_deeply_nested(mapper, gen):
    inner = StructInfo('_Inner', [u32('x', 0), u32('y', 0)])
    outer = StructInfo('_Outer', [FieldInfo('Inner', ValueType('_Inner'), nested=inner), u32('z')])
    out = emit(mapper, gen, StructInfo('S', [FieldInfo('Outer', ValueType('_Outer'), nested=outer)]))
    assert '\tOuter: struct {\n\t\tInner: struct #raw_union {\n\t\t\tx: u32,\n' in out
    assert '\t\t},\n\t\tz: u32,\n\t},\n' in out


def test_top_level_union(mapper, gen):
    out = emit(mapper, gen, StructInfo('U', [u32('a', 0), u32('b', 0)]))
    assert out.startswith('U :: struct #raw_union {\n')


def test_fixed_array(mapper, gen):
    field = FieldInfo('panose', ArrayType(PrimitiveType('Byte'), (ArrayDimension(0, 9),)))
    out = emit(mapper, gen, StructInfo('S', [field]))
    assert '\tpanose: [10]u8,' in out


def test_multidimensional_array_is_fatal(mapper, gen):
    field = FieldInfo('m', ArrayType(PrimitiveType('Single'), (ArrayDimension(0, 2), ArrayDimension(0, 2))))
    with pytest.raises(LayoutError, match='2-dimensional'):
        emit(mapper, gen, StructInfo('S', [field]))


def test_nonzero_lower_bound_is_fatal(mapper, gen):
    field = FieldInfo('a', ArrayType(PrimitiveType('Single'), (ArrayDimension(1, 4),)))
    with pytest.raises(LayoutError, match='lower bound'):
        emit(mapper, gen, StructInfo('S', [field]))


def bitfield_struct(*bits, storage='UInt32', name='_bitfield'):
    return StructInfo('DWRITE_LINE_BREAKPOINT', [
        FieldInfo(name, PrimitiveType(storage), bitfields=[BitfieldInfo(*b) for b in bits]),
    ])


def test_bitfield_group(mapper, gen):
    # Declared out of order; emitted by offset
    out = emit(mapper, gen, bitfield_struct(
        ('breakConditionAfter', 2, 2), ('breakConditionBefore', 0, 2),
        ('isWhitespace', 4, 1), ('isSoftHyphen', 5, 1), ('padding', 6, 2), storage='Byte'))
    assert out == (
        'DWRITE_LINE_BREAKPOINT :: struct {\n'
        '\tusing bitfield: bit_field u8 {\n'
        '\t\tbreakConditionBefore: u8 | 2,\n'
        '\t\tbreakConditionAfter: u8 | 2,\n'
        '\t\tisWhitespace: u8 | 1,\n'
        '\t\tisSoftHyphen: u8 | 1,\n'
        '\t\tpadding: u8 | 2,\n'
        '\t},\n'
        '}\n'
    )


def test_bitfield_gap_is_fatal(mapper, gen):
    with pytest.raises(LayoutError, match='starts at bit 3, expected 2'):
        emit(mapper, gen, bitfield_struct(('a', 0, 2), ('b', 3, 1)))


def test_bitfield_overlap_is_fatal(mapper, gen):
    with pytest.raises(LayoutError, match='expected 2'):
        emit(mapper, gen, bitfield_struct(('a', 0, 2), ('b', 1, 1)))


def test_bitfield_overflow_is_fatal(mapper, gen):
    with pytest.raises(LayoutError, match='past the 8-bit storage'):
        emit(mapper, gen, bitfield_struct(('a', 0, 4), ('b', 4, 5), storage='Byte'))


def test_bitfield_first_offset_must_be_zero(mapper, gen):
    with pytest.raises(LayoutError, match='expected 0'):
        emit(mapper, gen, bitfield_struct(('a', 1, 2)))


def test_bitfield_storage_must_be_integer(mapper, gen):
    with pytest.raises(LayoutError, match='not an integer'):
        emit(mapper, gen, bitfield_struct(('a', 0, 2), storage='Single'))


def test_bitfield_storage_name(mapper, gen):
    with pytest.raises(LayoutError, match='must be named _bitfield'):
        emit(mapper, gen, bitfield_struct(('a', 0, 2), name='flags'))
