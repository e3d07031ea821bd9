import sys
from pathlib import Path

import pytest

SCRIPTS_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(SCRIPTS_DIR))

from winmd_bindgen import CodeGen, MetadataStore, TypeMapper

NAMESPACE = 'Windows.Win32.Graphics.Test'
FOUNDATION = 'Windows.Win32.Foundation'
IUNKNOWN_GUID = '00000000-0000-0000-c000-000000000046'


def t_void():
    return {'kind': 'void'}


def t_prim(name):
    return {'kind': 'primitive', 'name': name}


def t_ptr(element):
    return {'kind': 'pointer', 'element': element}


def t_value(name, namespace=NAMESPACE, is_enum=False):
    return {'kind': 'value', 'name': name, 'namespace': namespace, 'is_enum': is_enum}


def t_iface(name, namespace=NAMESPACE):
    return {'kind': 'interface', 'name': name, 'namespace': namespace}


def struct_decl(name, fields, namespace=NAMESPACE):
    return {'namespace': namespace, 'name': name, 'is_class': True, 'is_value_type': True, 'fields': fields}


def enum_decl(name, members, namespace=NAMESPACE):
    members = [{'name': 'value__', 'value': 0}] + [{'name': n, 'value': v} for n, v in members]
    return {'namespace': namespace, 'name': name, 'is_enum': True, 'is_class': True,
            'is_value_type': True, 'members': members}


def iface_decl(name, methods, parent='IUnknown', guid=IUNKNOWN_GUID, namespace=NAMESPACE):
    return {'namespace': namespace, 'name': name, 'is_interface': True, 'guid': guid,
            'interfaces': [parent] if parent else [], 'methods': methods}


def method_decl(name, params=(), return_type=None):
    return {'name': name, 'params': [{'name': n, 'type': t} for n, t in params],
            'return_type': return_type or t_prim('Int32')}


def iunknown_decl():
    return iface_decl('IUnknown', [
        method_decl('QueryInterface', [('riid', t_ptr({'kind': 'guid'})), ('ppvObject', t_ptr(t_ptr(t_void())))],
                    t_value('HRESULT', FOUNDATION)),
        method_decl('AddRef', [], t_prim('UInt32')),
        method_decl('Release', [], t_prim('UInt32')),
    ], parent=None, namespace='Windows.Win32.System.Com')


@pytest.fixture
def mapper() -> TypeMapper:
    return TypeMapper()


@pytest.fixture
def gen() -> CodeGen:
    return CodeGen()


@pytest.fixture
def make_store():
    """Build a store from type declarations; IUnknown is always available"""

    def _make(*decls, namespaces=(NAMESPACE,)) -> MetadataStore:
        return MetadataStore.from_dict({'types': [iunknown_decl(), *decls]}, list(namespaces))

    return _make
