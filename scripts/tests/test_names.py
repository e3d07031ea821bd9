from winmd_bindgen import MethodNameScope, Rename, resolve_name_collision


def test_resolve_unused_name():
    names = set()
    assert resolve_name_collision('Get', names) == 'Get'
    assert names == {'Get'}


def test_resolve_appends_increasing_suffix():
    names = {'Get'}
    assert resolve_name_collision('Get', names) == 'Get1'
    assert resolve_name_collision('Get', names) == 'Get2'
    assert names == {'Get', 'Get1', 'Get2'}


def test_resolve_skips_taken_suffix():
    names = {'Get', 'Get1'}
    assert resolve_name_collision('Get', names) == 'Get2'


def test_scope_seeds_slot_names_verbatim():
    scope = MethodNameScope()
    scope.seed(['QueryInterface', 'AddRef', 'Release', 'Get1', 'Get', 'Get2'])
    assert scope.names == {'QueryInterface', 'AddRef', 'Release', 'Get1', 'Get', 'Get2'}
    assert scope.renames == []


def test_scope_renames_shadowed_method():
    scope = MethodNameScope()
    scope.seed(['Get'])
    assert scope.claim('B', 'Get') == 'Get1'
    assert scope.claim('B', 'Set') == 'Set'
    assert scope.renames == [Rename('B', 'Get', 'Get1')]
    assert str(scope.renames[0]) == 'Renamed B.Get to Get1'


def test_scope_orders_by_declaration():
    scope = MethodNameScope()
    scope.seed(['Get', 'Get1'])
    assert scope.claim('C', 'Get') == 'Get2'
    assert scope.claim('C', 'Get') == 'Get3'


def test_scope_skips_inherited_suffix():
    scope = MethodNameScope()
    scope.seed(['Get', 'Get1', 'Get2'])
    assert scope.claim('C', 'Get') == 'Get3'
