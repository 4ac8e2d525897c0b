import pytest

from tabledoc.database.models import ForeignKeyFact, RawColumnFact
from tabledoc.documentation.models import ForeignKeyTarget
from tabledoc.documentation.normalizer import SchemaNormalizer
from tabledoc.exceptions import RenderingFailure


def test_type_suffix_only_when_length_present():
    assert SchemaNormalizer.render_type('varchar', 50) == 'varchar(50)'
    assert SchemaNormalizer.render_type('int') == 'int'
    assert SchemaNormalizer.render_type('decimal', 0) == 'decimal(0)'


def test_column_order_is_catalog_order():
    facts = [RawColumnFact(name=name, type_name='int') for name in ('zeta', 'alpha', 'mid')]
    descriptors = SchemaNormalizer().normalize(facts)
    assert [d.name for d in descriptors] == ['zeta', 'alpha', 'mid']


def test_description_precedence_skips_blank_sources():
    fact = RawColumnFact(name='amount', type_name='money', descriptions=(None, '  ', 'Net amount', 'Gross'))
    assert SchemaNormalizer().normalize([fact])[0].description == 'Net amount'


def test_missing_description_and_foreign_key_are_absent():
    descriptor = SchemaNormalizer().normalize([RawColumnFact(name='id', type_name='int', nullable=False)])[0]
    assert descriptor.description is None
    assert descriptor.foreign_key is None
    assert descriptor.index_name is None
    assert descriptor.is_nullable is False


def test_foreign_key_is_carried_over():
    fact = RawColumnFact(
        name='customer_id',
        type_name='int',
        foreign_key=ForeignKeyFact('customers', 'id', 'fk_orders_customers')
    )
    descriptor = SchemaNormalizer().normalize([fact])[0]
    assert descriptor.foreign_key == ForeignKeyTarget('customers', 'id', 'fk_orders_customers')


def test_first_index_name_alphabetically():
    fact = RawColumnFact(name='code', type_name='char', length=3, index_names=('ux_code', 'ix_code', 'pk_code'))
    descriptor = SchemaNormalizer().normalize([fact])[0]
    assert descriptor.index_name == 'ix_code'
    assert descriptor.declared_type == 'char(3)'


def test_duplicate_column_names_are_rejected():
    facts = [RawColumnFact(name='id', type_name='int'), RawColumnFact(name='id', type_name='bigint')]
    with pytest.raises(RenderingFailure):
        SchemaNormalizer().normalize(facts)
