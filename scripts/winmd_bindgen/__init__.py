"""
winmd_bindgen - Odin binding generation from Win32 metadata

This package turns a decoded Win32 metadata (winmd) dump into Odin
declarations: foreign procedures, constants, enums, layout-faithful structs
and COM interfaces with flattened vtables. Library-specific settings live in
a BindingConfig filled in by a configuration module (see bindings/).
"""

from .ir import (
    MetadataStore, TypeShape, classify,
    StructInfo, FieldInfo, BitfieldInfo, MethodInfo, FuncInfo, ParamInfo,
    EnumInfo, EnumItem, InterfaceInfo, FunctionTypeInfo, Guid, ConstantValue,
    VoidType, GuidType, PrimitiveType, PointerType, ArrayType, ArrayDimension,
    ValueType, InterfaceType,
)
from .errors import GenerationError, MetadataError, TypeMappingError, LayoutError, AbiFixupError
from .types import TypeMapper, PrefixRedirect
from .codegen import CodeGen
from .names import MethodNameScope, Rename, resolve_name_collision
from .abi import ReturnFixup, fix_return_type, is_return_type_fix_needed
from .struct import StructGenerator
from .func import FuncGenerator, ImportLib
from .callback import CallbackGenerator
from .enum import EnumGenerator
from .interface import InterfaceGenerator
from .generator import Generator, BindingConfig, GenerationResult, Import

__all__ = [
    'MetadataStore', 'TypeShape', 'classify',
    'StructInfo', 'FieldInfo', 'BitfieldInfo', 'MethodInfo', 'FuncInfo', 'ParamInfo',
    'EnumInfo', 'EnumItem', 'InterfaceInfo', 'FunctionTypeInfo', 'Guid', 'ConstantValue',
    'VoidType', 'GuidType', 'PrimitiveType', 'PointerType', 'ArrayType', 'ArrayDimension',
    'ValueType', 'InterfaceType',
    'GenerationError', 'MetadataError', 'TypeMappingError', 'LayoutError', 'AbiFixupError',
    'TypeMapper', 'PrefixRedirect',
    'CodeGen',
    'MethodNameScope', 'Rename', 'resolve_name_collision',
    'ReturnFixup', 'fix_return_type', 'is_return_type_fix_needed',
    'StructGenerator',
    'FuncGenerator', 'ImportLib',
    'CallbackGenerator',
    'EnumGenerator',
    'InterfaceGenerator',
    'Generator', 'BindingConfig', 'GenerationResult', 'Import',
]
