"""
Main generator module

Orchestrates all components to generate one Odin bindings file.
"""

from dataclasses import dataclass, field
from typing import Optional

from .ir import MetadataStore
from .codegen import CodeGen
from .types import TypeMapper, PrefixRedirect, PLATFORM_NAMES, PREFIX_REDIRECTS
from .struct import StructGenerator
from .func import FuncGenerator, ImportLib
from .callback import CallbackGenerator
from .enum import EnumGenerator
from .interface import InterfaceGenerator
from .names import Rename


@dataclass(frozen=True)
class Import:
    """An Odin import line"""
    path: str
    alias: Optional[str] = None

    def __str__(self) -> str:
        if self.alias:
            return f'import {self.alias} "{self.path}"'
        return f'import "{self.path}"'


class BindingConfig:
    """Configuration for one generated bindings package"""

    def __init__(self, package: str):
        self.package = package
        self.namespaces: list[str] = []
        self.imports: list[Import] = []
        self.preamble: str = ''
        self.import_libs: list[ImportLib] = []
        self.platform_names: list[str] = list(PLATFORM_NAMES)
        self.redirects: list[PrefixRedirect] = list(PREFIX_REDIRECTS)


@dataclass
class GenerationResult:
    """Generated source and the diagnostics collected on the way"""
    text: str
    renames: list[Rename] = field(default_factory=list)


class Generator:
    """Main binding generator"""

    def __init__(self, config: BindingConfig):
        self.config = config

    def load(self, metadata_path: str) -> MetadataStore:
        """Load the metadata dump, restricted to the configured namespaces"""
        return MetadataStore.load(metadata_path, self.config.namespaces)

    def generate_file(self, metadata_path: str, output_path: str) -> GenerationResult:
        """Generate bindings from a metadata dump into a file"""
        print('=== Generating Odin bindings:')
        print(f'  {metadata_path} => {output_path}')

        store = self.load(metadata_path)
        result = self.generate(store)
        for rename in result.renames:
            print(f'  >> {rename}')

        with open(output_path, 'w', newline='\n') as f:
            f.write(result.text)
        return result

    def generate(self, store: MetadataStore) -> GenerationResult:
        """Generate Odin source for a metadata store"""
        gen = CodeGen()
        config = self.config
        renames: list[Rename] = []

        type_mapper = TypeMapper(config.platform_names, config.redirects)
        func_gen = FuncGenerator(type_mapper)
        enum_gen = EnumGenerator()
        callback_gen = CallbackGenerator(type_mapper)
        struct_gen = StructGenerator(type_mapper)
        interface_gen = InterfaceGenerator(store, type_mapper)

        def by_name(items):
            return sorted(items, key=lambda i: i.name)

        # Header
        gen.line(f'package {config.package}')
        for imp in config.imports:
            gen.line(str(imp))
        if config.preamble:
            gen.line()
            gen.raw(config.preamble.strip('\n'))

        # Foreign functions
        funcs = by_name(store.funcs)
        for import_lib in config.import_libs:
            gen.line()
            func_gen.generate(import_lib, funcs, gen)

        # Constants
        gen.line()
        for const in by_name(store.fields):
            enum_gen.generate_const(const, gen)

        # Function pointer types
        gen.line()
        for function_type in by_name(store.function_types):
            callback_gen.generate(function_type, gen)

        for enum in by_name(store.enums):
            gen.line()
            enum_gen.generate(enum, gen)

        for struct in by_name(store.structs):
            gen.line()
            struct_gen.generate(struct, gen)

        for iface in by_name(store.interfaces):
            gen.line()
            renames.extend(interface_gen.generate(iface, gen))

        return GenerationResult(gen.output(), renames)
