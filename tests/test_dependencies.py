from tabledoc.database.models import (
    DependencyDirection,
    DependencyKind,
    RoutineReference,
    TableIdentity,
    TableReference,
)
from tabledoc.documentation.dependencies import DependencyRegistry, DependencyResolver

from conftest import FakeCatalogReader


def test_no_foreign_keys_or_routines_yields_nothing():
    reader = FakeCatalogReader()
    assert DependencyResolver(reader).resolve(TableIdentity('widgets')) == []


def test_passes_run_in_fixed_order_with_global_ids():
    reader = FakeCatalogReader()
    reader.outgoing['orders'] = [TableReference('customers'), TableReference('stores')]
    reader.incoming['orders'] = [TableReference('order_lines'), TableReference('invoices')]
    reader.routines['orders'] = [RoutineReference('archive_orders', 'Moves old orders')]

    dependencies = DependencyResolver(reader).resolve(TableIdentity('orders'))

    assert [(d.sequence_id, d.kind, d.object_name, d.direction) for d in dependencies] == [
        (1, DependencyKind.TABLE, 'customers', DependencyDirection.PARENT),
        (2, DependencyKind.TABLE, 'stores', DependencyDirection.PARENT),
        (3, DependencyKind.TABLE, 'order_lines', DependencyDirection.CHILD),
        (4, DependencyKind.TABLE, 'invoices', DependencyDirection.CHILD),
        (5, DependencyKind.ROUTINE, 'archive_orders', DependencyDirection.CHILD),
    ]
    assert dependencies[4].description == 'Moves old orders'
    assert all(d.subject_table == TableIdentity('orders') for d in dependencies)


def test_duplicate_foreign_keys_collapse_to_one_dependency():
    reader = FakeCatalogReader()
    reader.outgoing['orders'] = [
        TableReference('customers', 'fk_billing_customer'),
        TableReference('customers', 'fk_shipping_customer'),
    ]

    dependencies = DependencyResolver(reader).resolve(TableIdentity('orders'))

    assert len(dependencies) == 1
    assert dependencies[0].object_name == 'customers'


def test_same_table_in_both_directions_is_kept_twice():
    reader = FakeCatalogReader()
    reader.outgoing['employees'] = [TableReference('employees', 'fk_manager')]
    reader.incoming['employees'] = [TableReference('employees', 'fk_manager')]

    dependencies = DependencyResolver(reader).resolve(TableIdentity('employees'))

    assert [d.direction for d in dependencies] == [DependencyDirection.PARENT, DependencyDirection.CHILD]


def test_routine_without_comment_has_no_description():
    reader = FakeCatalogReader()
    reader.routines['orders'] = [RoutineReference('archive_orders', '')]

    dependency = DependencyResolver(reader).resolve(TableIdentity('orders'))[0]

    assert dependency.kind == DependencyKind.ROUTINE
    assert dependency.description is None


def test_registry_ids_skip_nothing_after_duplicates():
    registry = DependencyRegistry(TableIdentity('orders'))
    assert registry.add(DependencyKind.TABLE, 'a', DependencyDirection.PARENT)
    assert not registry.add(DependencyKind.TABLE, 'a', DependencyDirection.PARENT)
    assert registry.add(DependencyKind.TABLE, 'b', DependencyDirection.PARENT)
    assert [d.sequence_id for d in registry.dependencies] == [1, 2]


def test_whitespace_routine_comment_has_no_description():
    reader = FakeCatalogReader()
    reader.routines['orders'] = [RoutineReference('archive_orders', '  \t')]

    dependency = DependencyResolver(reader).resolve(TableIdentity('orders'))[0]

    assert dependency.description is None
