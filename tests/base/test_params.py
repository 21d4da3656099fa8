# tests/base/test_params.py

import pytest
from pydantic import ValidationError

from encoded_query import QueryBuilder, QueryEmptyException, QueryParams


@pytest.fixture
def active_incidents() -> QueryBuilder:
    return (
        QueryBuilder()
        .field("active").equals("true")
        .and_()
        .field("state").not_equals([6, 7, 8])
        .field("priority").order_ascending()
    )


def test_build_params_defaults(active_incidents: QueryBuilder):
    assert active_incidents.build_params() == {
        "sysparm_query": "active=true^stateNOT IN6,7,8ORDERBYpriority",
        "sysparm_display_value": "true",
        "sysparm_exclude_reference_link": "true",
    }


def test_build_params_with_options(active_incidents: QueryBuilder):
    params = active_incidents.build_params(
        limit=100,
        offset=0,
        fields=("number", "short_description", "priority"),
        display_value="all",
        exclude_reference_link=False,
    )
    assert params == {
        "sysparm_query": "active=true^stateNOT IN6,7,8ORDERBYpriority",
        "sysparm_display_value": "all",
        "sysparm_exclude_reference_link": "false",
        "sysparm_limit": "100",
        "sysparm_offset": "0",
        "sysparm_fields": "number,short_description,priority",
    }


def test_build_params_single_field_name(active_incidents: QueryBuilder):
    params = active_incidents.build_params(fields="number")
    assert params["sysparm_fields"] == "number"


def test_build_params_does_not_consume_builder(active_incidents: QueryBuilder):
    active_incidents.build_params(limit=5)
    assert active_incidents.build() == "active=true^stateNOT IN6,7,8ORDERBYpriority"


def test_build_params_empty_query_raises():
    with pytest.raises(QueryEmptyException):
        QueryBuilder().build_params()


@pytest.mark.parametrize("kwargs", [{"limit": 0}, {"limit": -1}, {"offset": -1}])
def test_build_params_rejects_invalid_paging(active_incidents: QueryBuilder, kwargs):
    with pytest.raises(ValidationError):
        active_incidents.build_params(**kwargs)


def test_query_params_accepts_aliases():
    params = QueryParams(sysparm_query="state=1", sysparm_limit=10)
    assert params.to_request_params() == {
        "sysparm_query": "state=1",
        "sysparm_display_value": "true",
        "sysparm_exclude_reference_link": "true",
        "sysparm_limit": "10",
    }


def test_query_params_requires_query():
    with pytest.raises(ValidationError):
        QueryParams(query="")
