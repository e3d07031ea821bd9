"""
Function pointer type generation module

Generates `#type proc` declarations for metadata delegates.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen, format_params, sanitize_name

if TYPE_CHECKING:
    from .ir import FunctionTypeInfo
    from .types import TypeMapper

CALLING_CONVENTION = 'system'


class CallbackGenerator:
    """Generates function pointer types"""

    def __init__(self, type_mapper: 'TypeMapper'):
        self.type_mapper = type_mapper

    def generate(self, function_type: 'FunctionTypeInfo', gen: CodeGen):
        """Generate a function pointer type declaration"""
        invoke = function_type.invoke
        params = [(sanitize_name(p.name), self.type_mapper.map(p.type)) for p in invoke.params]
        decl = f'{function_type.name} :: #type proc "{CALLING_CONVENTION}" ({format_params(params)})'
        return_type = self.type_mapper.map(invoke.return_type)
        if return_type:
            decl += f' -> {return_type}'
        gen.line(decl)
