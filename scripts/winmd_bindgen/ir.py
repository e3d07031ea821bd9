"""
IR (Intermediate Representation) module

Reads and represents the decoded Win32 metadata (winmd) JSON dump.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union
import gzip
import json
import uuid

from .errors import MetadataError

APIS_TYPE_NAME = 'Apis'
DELEGATE_BASE_TYPE = 'System.MulticastDelegate'
ENUM_VALUE_FIELD = 'value__'

# (bit width, signed, float)
PRIMITIVE_LAYOUTS = {
    'SByte': (8, True, False),
    'Byte': (8, False, False),
    'Int16': (16, True, False),
    'UInt16': (16, False, False),
    'Int32': (32, True, False),
    'UInt32': (32, False, False),
    'Int64': (64, True, False),
    'UInt64': (64, False, False),
    'Single': (32, True, True),
    'Double': (64, True, True),
}


# ------------------------------------------------------------------------------
# Types
# ------------------------------------------------------------------------------

@dataclass(frozen=True)
class VoidType:
    """System.Void"""


@dataclass(frozen=True)
class GuidType:
    """System.Guid"""


@dataclass(frozen=True)
class PrimitiveType:
    """Built-in numeric type"""
    kind: str

    @property
    def width(self) -> Optional[int]:
        layout = PRIMITIVE_LAYOUTS.get(self.kind)
        return layout[0] if layout else None

    @property
    def signed(self) -> bool:
        layout = PRIMITIVE_LAYOUTS.get(self.kind)
        return layout[1] if layout else False

    @property
    def is_float(self) -> bool:
        layout = PRIMITIVE_LAYOUTS.get(self.kind)
        return layout[2] if layout else False

    @property
    def is_integer(self) -> bool:
        return self.kind in PRIMITIVE_LAYOUTS and not self.is_float


@dataclass(frozen=True)
class PointerType:
    """Unmanaged pointer"""
    element: 'MetadataType'


@dataclass(frozen=True)
class ArrayDimension:
    """Bounds of one array dimension (upper bound inclusive)"""
    lower_bound: int
    upper_bound: int

    @property
    def length(self) -> int:
        return self.upper_bound - self.lower_bound + 1


@dataclass(frozen=True)
class ArrayType:
    """Fixed-size inline array"""
    element: 'MetadataType'
    dimensions: tuple[ArrayDimension, ...]


@dataclass(frozen=True)
class ValueType:
    """Reference to a struct or enum"""
    name: str
    namespace: str = ''
    is_enum: bool = False


@dataclass(frozen=True)
class InterfaceType:
    """Reference to a COM interface"""
    name: str
    namespace: str = ''


MetadataType = Union[VoidType, GuidType, PrimitiveType, PointerType, ArrayType, ValueType, InterfaceType]


def is_value_type(t: MetadataType) -> bool:
    """Check if a type is held by value (the CLR notion, primitives included)"""
    return isinstance(t, (PrimitiveType, ValueType, GuidType))


# ------------------------------------------------------------------------------
# Declarations
# ------------------------------------------------------------------------------

@dataclass(frozen=True)
class Guid:
    """COM identity, in the native GUID layout"""
    data1: int
    data2: int
    data3: int
    data4: tuple[int, ...]

    @classmethod
    def from_args(cls, args: list[int]) -> 'Guid':
        """Create from the 11 GuidAttribute constructor arguments"""
        if len(args) != 11:
            raise MetadataError(f'GUID needs 11 components, got {len(args)}')
        limits = [0xFFFFFFFF, 0xFFFF, 0xFFFF] + [0xFF] * 8
        for value, limit in zip(args, limits):
            if not 0 <= value <= limit:
                raise MetadataError(f'GUID component out of range: {value:#x}')
        return cls(args[0], args[1], args[2], tuple(args[3:]))

    @classmethod
    def parse(cls, text: str) -> 'Guid':
        """Create from the canonical xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx form"""
        try:
            u = uuid.UUID(text)
        except ValueError:
            raise MetadataError(f'invalid GUID: {text!r}') from None
        return cls(u.time_low, u.time_mid, u.time_hi_version, tuple(u.bytes[8:]))

    @classmethod
    def from_value(cls, value) -> 'Guid':
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, list):
            return cls.from_args(value)
        raise MetadataError(f'invalid GUID: {value!r}')


@dataclass(frozen=True)
class ConstantValue:
    """Literal value of a constant field"""
    kind: str
    value: Union[int, float, str]


@dataclass
class BitfieldInfo:
    """One named bit range of a _bitfield storage field"""
    name: str
    offset: int
    length: int


@dataclass
class FieldInfo:
    """Struct field or global constant"""
    name: str
    type: MetadataType
    offset: int = -1  # -1 for sequential layout
    constant: Optional[ConstantValue] = None
    guid: Optional[Guid] = None
    nested: Optional['StructInfo'] = None
    bitfields: list[BitfieldInfo] = field(default_factory=list)


@dataclass
class StructInfo:
    """Struct type information (also used for inline nested types)"""
    name: str
    fields: list[FieldInfo]
    namespace: str = ''

    @property
    def is_union(self) -> bool:
        """All members overlap at offset 0"""
        return len(self.fields) > 1 and all(f.offset == 0 for f in self.fields)


@dataclass
class ParamInfo:
    """Function parameter information"""
    name: str
    type: MetadataType


@dataclass
class MethodInfo:
    """Interface method or delegate signature"""
    name: str
    params: list[ParamInfo]
    return_type: MetadataType


@dataclass
class FuncInfo(MethodInfo):
    """Global function exported from an import library"""


@dataclass
class EnumItem:
    """Enum item (constant)"""
    name: str
    value: int


@dataclass
class EnumInfo:
    """Enum type information"""
    name: str
    items: list[EnumItem]
    namespace: str = ''


@dataclass
class InterfaceInfo:
    """COM interface with its own (non-inherited) methods"""
    name: str
    guid: Optional[Guid]
    parent: Optional[str]
    methods: list[MethodInfo]
    namespace: str = ''


@dataclass
class FunctionTypeInfo:
    """Delegate, i.e. a named function pointer type"""
    name: str
    invoke: MethodInfo
    namespace: str = ''


class TypeShape(Enum):
    """Closed set of type declarations the generator understands"""
    APIS = 'apis'
    ENUM = 'enum'
    INTERFACE = 'interface'
    STRUCT = 'struct'
    DELEGATE = 'delegate'
    UNRECOGNIZED = 'unrecognized'


def classify(decl: dict) -> TypeShape:
    """Get the shape of a type declaration"""
    if decl.get('name') == APIS_TYPE_NAME:
        return TypeShape.APIS
    if decl.get('is_enum', False):
        return TypeShape.ENUM
    if decl.get('is_interface', False):
        return TypeShape.INTERFACE
    if decl.get('is_class', False) and decl.get('is_value_type', False):
        return TypeShape.STRUCT
    if decl.get('base_type') == DELEGATE_BASE_TYPE:
        return TypeShape.DELEGATE
    return TypeShape.UNRECOGNIZED


# ------------------------------------------------------------------------------
# Store
# ------------------------------------------------------------------------------

@dataclass
class MetadataStore:
    """Decoded metadata, filtered to the namespaces of interest"""
    namespaces: list[str]
    fields: list[FieldInfo] = field(default_factory=list)
    funcs: list[FuncInfo] = field(default_factory=list)
    enums: list[EnumInfo] = field(default_factory=list)
    structs: list[StructInfo] = field(default_factory=list)
    interfaces: list[InterfaceInfo] = field(default_factory=list)
    function_types: list[FunctionTypeInfo] = field(default_factory=list)
    # Interfaces of the namespaces, plus the outside ones parsed so far
    interface_index: dict[str, InterfaceInfo] = field(default_factory=dict)
    # Raw declarations of the interfaces outside the namespaces, parsed on first use
    foreign_interfaces: dict[str, dict] = field(default_factory=dict)

    @classmethod
    def load(cls, path: str, namespaces: list[str]) -> 'MetadataStore':
        """Load from a JSON dump, optionally gzip-compressed"""
        opener = gzip.open if path.endswith('.gz') else open
        with opener(path, 'rt', encoding='utf-8') as f:
            data = json.load(f)
        return cls.from_dict(data, namespaces)

    @classmethod
    def from_dict(cls, data: dict, namespaces: list[str]) -> 'MetadataStore':
        """Create from an already decoded dictionary"""
        store = cls(namespaces=list(namespaces))

        for decl in data.get('types', []):
            in_scope = decl.get('namespace', '') in store.namespaces
            if not in_scope:
                if decl.get('is_interface', False):
                    store.foreign_interfaces.setdefault(decl['name'], decl)
                continue

            shape = classify(decl)
            if shape is TypeShape.APIS:
                for f in decl.get('fields', []):
                    store.fields.append(cls._parse_field(f))
                for m in decl.get('methods', []):
                    store.funcs.append(cls._parse_method(m, FuncInfo))
            elif shape is TypeShape.ENUM:
                store.enums.append(cls._parse_enum(decl))
            elif shape is TypeShape.INTERFACE:
                iface = cls._parse_interface(decl)
                store.interfaces.append(iface)
                store.interface_index[iface.name] = iface
            elif shape is TypeShape.STRUCT:
                store.structs.append(cls._parse_struct(decl))
            elif shape is TypeShape.DELEGATE:
                store.function_types.append(cls._parse_delegate(decl))
            else:
                raise MetadataError(
                    f"unrecognized type shape: {decl.get('namespace', '')}.{decl.get('name', '?')}")

        return store

    @classmethod
    def _parse_type(cls, data: dict) -> MetadataType:
        """Parse a type reference"""
        kind = data.get('kind')
        if kind == 'void':
            return VoidType()
        elif kind == 'guid':
            return GuidType()
        elif kind == 'primitive':
            return PrimitiveType(data['name'])
        elif kind == 'pointer':
            return PointerType(cls._parse_type(data['element']))
        elif kind == 'array':
            dims = tuple(ArrayDimension(d.get('lower', 0), d['upper']) for d in data.get('dimensions', []))
            return ArrayType(cls._parse_type(data['element']), dims)
        elif kind == 'value':
            if data.get('namespace') == 'System' and data['name'] == 'Guid':
                return GuidType()
            return ValueType(data['name'], data.get('namespace', ''), data.get('is_enum', False))
        elif kind == 'interface':
            return InterfaceType(data['name'], data.get('namespace', ''))
        raise MetadataError(f'unknown type kind: {kind!r}')

    @classmethod
    def _parse_field(cls, data: dict) -> FieldInfo:
        """Parse a struct field or global constant"""
        constant = None
        if 'constant' in data:
            c = data['constant']
            constant = ConstantValue(kind=c['kind'], value=c['value'])
        nested = None
        if 'nested' in data:
            nested = cls._parse_struct(data['nested'])
        return FieldInfo(
            name=data['name'],
            type=cls._parse_type(data['type']),
            offset=data.get('offset', -1),
            constant=constant,
            guid=Guid.from_value(data['guid']) if 'guid' in data else None,
            nested=nested,
            bitfields=[BitfieldInfo(b['name'], b['offset'], b['length']) for b in data.get('bitfields', [])],
        )

    @classmethod
    def _parse_method(cls, data: dict, method_cls=MethodInfo) -> MethodInfo:
        """Parse a method signature"""
        params = [ParamInfo(name=p['name'], type=cls._parse_type(p['type'])) for p in data.get('params', [])]
        return method_cls(
            name=data['name'],
            params=params,
            return_type=cls._parse_type(data.get('return_type', {'kind': 'void'})),
        )

    @classmethod
    def _parse_struct(cls, decl: dict) -> StructInfo:
        return StructInfo(
            name=decl.get('name', ''),
            fields=[cls._parse_field(f) for f in decl.get('fields', [])],
            namespace=decl.get('namespace', ''),
        )

    @classmethod
    def _parse_enum(cls, decl: dict) -> EnumInfo:
        items = [EnumItem(name=m['name'], value=int(m['value']))
                 for m in decl.get('members', []) if m['name'] != ENUM_VALUE_FIELD]
        return EnumInfo(name=decl['name'], items=items, namespace=decl.get('namespace', ''))

    @classmethod
    def _parse_interface(cls, decl: dict) -> InterfaceInfo:
        """Parse an interface declaration"""
        name = decl['name']
        if decl.get('base_type'):
            raise MetadataError(f'interface {name} has a base class: {decl["base_type"]}')
        parents = decl.get('interfaces', [])
        if len(parents) > 1:
            raise MetadataError(f'interface {name} has {len(parents)} parent interfaces')
        return InterfaceInfo(
            name=name,
            guid=Guid.from_value(decl['guid']) if decl.get('guid') is not None else None,
            parent=parents[0] if parents else None,
            methods=[cls._parse_method(m) for m in decl.get('methods', [])],
            namespace=decl.get('namespace', ''),
        )

    @classmethod
    def _parse_delegate(cls, decl: dict) -> FunctionTypeInfo:
        for m in decl.get('methods', []):
            if m['name'] == 'Invoke':
                return FunctionTypeInfo(name=decl['name'], invoke=cls._parse_method(m),
                                        namespace=decl.get('namespace', ''))
        raise MetadataError(f"delegate {decl['name']} has no Invoke method")

    def interface(self, name: str) -> Optional[InterfaceInfo]:
        """Look up an interface by name, parsing an outside declaration on first use"""
        iface = self.interface_index.get(name)
        if iface is None and name in self.foreign_interfaces:
            iface = self._parse_interface(self.foreign_interfaces[name])
            self.interface_index[name] = iface
        return iface

    def parent_of(self, iface: InterfaceInfo) -> Optional[InterfaceInfo]:
        """Get the parent interface (None for a root interface)"""
        if iface.parent is None:
            return None
        parent = self.interface(iface.parent)
        if parent is None:
            raise MetadataError(f'unresolved parent interface {iface.parent} of {iface.name}')
        return parent

    def ancestors(self, iface: InterfaceInfo) -> Iterator[InterfaceInfo]:
        """Walk the inheritance chain from the immediate parent to the root"""
        seen = {iface.name}
        parent = self.parent_of(iface)
        while parent is not None:
            if parent.name in seen:
                raise MetadataError(f'cyclic interface inheritance at {parent.name}')
            seen.add(parent.name)
            yield parent
            parent = self.parent_of(parent)
