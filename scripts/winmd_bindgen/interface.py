"""
Interface generation module

Generates COM interfaces as a struct holding a vtable pointer. The vtable
struct embeds the parent's vtable with `using`, so every inherited slot comes
first and in the parent's order.

    ID2D1Resource :: struct #raw_union {
        #subtype parent: win32.IUnknown,
        using vtable: ^ID2D1Resource_VTable,
    }
    ID2D1Resource_VTable :: struct {
        using iunknown_vtable: win32.IUnknown_VTable,
        GetFactory: proc "system" (this: ^ID2D1Resource, factory: ^^ID2D1Factory),
    }
"""

from typing import TYPE_CHECKING

from .abi import fix_return_type
from .callback import CALLING_CONVENTION
from .codegen import CodeGen, format_params, sanitize_name, short_name
from .enum import guid_literal
from .errors import MetadataError
from .names import MethodNameScope, Rename

if TYPE_CHECKING:
    from .ir import InterfaceInfo, MetadataStore, MethodInfo
    from .types import TypeMapper


class InterfaceGenerator:
    """Generates interface and vtable declarations"""

    def __init__(self, store: 'MetadataStore', type_mapper: 'TypeMapper'):
        self.store = store
        self.type_mapper = type_mapper
        # Interface name -> slot names of its flattened vtable, root first
        self._slots: dict[str, list[str]] = {}

    def generate(self, iface: 'InterfaceInfo', gen: CodeGen) -> list[Rename]:
        """Generate UUID, interface and vtable; returns the renamed methods"""
        name = iface.name
        if iface.guid is None:
            raise MetadataError(f'interface {name} has no GuidAttribute')
        gen.line(f'{name}_UUID := {guid_literal(iface.guid)}')

        parent = self.store.parent_of(iface)
        parent_name = self.type_mapper.odin_name(parent.name) if parent is not None else None

        if parent_name is None:
            with gen.block(f'{name} :: struct {{'):
                gen.line(f'using vtable: ^{name}_VTable,')
        else:
            with gen.block(f'{name} :: struct #raw_union {{'):
                gen.line(f'#subtype parent: {parent_name},')
                gen.line(f'using vtable: ^{name}_VTable,')

        inherited = self.vtable_slots(parent) if parent is not None else []
        scope = MethodNameScope()
        scope.seed(inherited)

        own = []
        with gen.block(f'{name}_VTable :: struct {{'):
            if parent_name is not None:
                gen.line(f'using {short_name(parent_name).lower()}_vtable: {parent_name}_VTable,')
            for method in iface.methods:
                slot_name = scope.claim(name, method.name)
                own.append(slot_name)
                gen.line(f'{slot_name}: {self._slot_type(iface, method)},')

        self._slots[name] = inherited + own
        return scope.renames

    def vtable_slots(self, iface: 'InterfaceInfo') -> list[str]:
        """Get the slot names of the flattened vtable, resolving from the root down"""
        chain = [iface, *self.store.ancestors(iface)]
        slots: list[str] = []
        for member in reversed(chain):
            cached = self._slots.get(member.name)
            if cached is None:
                scope = MethodNameScope()
                scope.seed(slots)
                cached = slots + [scope.claim(member.name, m.name) for m in member.methods]
                self._slots[member.name] = cached
            slots = cached
        return slots

    def _slot_type(self, iface: 'InterfaceInfo', method: 'MethodInfo') -> str:
        """Get the proc type of one vtable slot"""
        params = [('this', f'^{iface.name}')]
        params += [(sanitize_name(p.name), self.type_mapper.map(p.type)) for p in method.params]

        fixup = fix_return_type(method, self.type_mapper, iface.name)
        if fixup.is_fixed:
            # The native method also returns the pointer it was given; not needed here
            params.append(fixup.out_param)

        decl = f'proc "{CALLING_CONVENTION}" ({format_params(params)})'
        if fixup.return_type:
            decl += f' -> {fixup.return_type}'
        return decl
