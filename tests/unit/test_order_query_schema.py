import pytest
from pydantic import ValidationError

from app.models.enums import OrderPaymentStatus
from app.schemas.order_query import FILTER_FIELDS, GetOrdersQuery

pytestmark = pytest.mark.grp_orders


def test_empty_has_no_constraints():
    q = GetOrdersQuery.empty()
    assert all(getattr(q, name) is None for name in GetOrdersQuery.model_fields)


def test_collections_are_normalized_to_immutable_values():
    q = GetOrdersQuery(
        warehouse_ids=[1, 2, 2],
        order_payment_status=["Settled"],
        sorters=["id", "date:desc"],
        reverse=["id"],
    )
    assert q.warehouse_ids == frozenset({1, 2})
    assert q.order_payment_status == frozenset({OrderPaymentStatus.Settled})
    assert q.sorters == ("id", "date:desc")
    assert q.reverse == frozenset({"id"})


def test_empty_collections_mean_absent():
    q = GetOrdersQuery(warehouse_ids=[], order_payment_status=set(), sorters=[], reverse=set())
    assert q.warehouse_ids is None
    assert q.order_payment_status is None
    assert q.sorters is None
    assert q.reverse is None


def test_blank_fuzzy_means_absent():
    assert GetOrdersQuery(fuzzy="   ").fuzzy is None
    assert GetOrdersQuery(fuzzy=" abc ").fuzzy == "abc"


def test_query_is_frozen():
    q = GetOrdersQuery(id=1)
    with pytest.raises(ValidationError):
        q.id = 2


def test_unknown_field_and_bad_enum_rejected():
    with pytest.raises(ValidationError):
        GetOrdersQuery(status="x")
    with pytest.raises(ValidationError):
        GetOrdersQuery(currency="EUR")


def test_filter_fields_exclude_sort_and_reverse():
    assert "sorters" not in FILTER_FIELDS
    assert "reverse" not in FILTER_FIELDS
    assert FILTER_FIELDS[0] == "id"
    assert FILTER_FIELDS[-1] == "last_updated_date_end"
