"""
Foreign function generation module

Groups the global functions into one `foreign` block per import library.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .codegen import CodeGen, format_params, sanitize_name

if TYPE_CHECKING:
    from .ir import FuncInfo
    from .types import TypeMapper


@dataclass(frozen=True)
class ImportLib:
    """An import library and the function name prefix it exports"""
    lib_name: str
    prefix: str


class FuncGenerator:
    """Generates foreign import blocks"""

    def __init__(self, type_mapper: 'TypeMapper'):
        self.type_mapper = type_mapper

    def generate(self, import_lib: ImportLib, funcs: list['FuncInfo'], gen: CodeGen):
        """Generate the foreign block of one import library"""
        lib = import_lib.lib_name
        gen.line(f'foreign import {lib} "system:{lib}.lib"')
        gen.line('@(default_calling_convention="system")')
        with gen.block(f'foreign {lib} {{'):
            for func in sorted(funcs, key=lambda f: f.name):
                if func.name.startswith(import_lib.prefix):
                    self.generate_func(func, gen)

    def generate_func(self, func: 'FuncInfo', gen: CodeGen):
        """Generate one foreign procedure declaration"""
        params = [(sanitize_name(p.name), self.type_mapper.map(p.type)) for p in func.params]
        decl = f'{func.name} :: proc({format_params(params)})'
        return_type = self.type_mapper.map(func.return_type)
        if return_type:
            decl += f' -> {return_type}'
        gen.line(decl + ' ---')
