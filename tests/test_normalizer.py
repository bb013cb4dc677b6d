import pytest
from pydantic import ValidationError

from gudang.pagination.models import PageInfo
from gudang.pagination.normalizer import ResponseShape, classify_response, normalize_response


@pytest.mark.parametrize(
    ("response", "items", "page_info", "shape"),
    [
        (
            {"data": {"data": [{"id": 1}], "pagination": {"page": 2, "limit": 5, "total": 11, "totalPages": 3}}},
            [{"id": 1}],
            {"page": 2, "limit": 5, "total": 11, "totalPages": 3},
            ResponseShape.ENVELOPED_DATA,
        ),
        (
            {"data": {"items": [{"id": 7}], "pagination": {"page": 1, "limit": 10, "total": 1, "totalPages": 1}}},
            [{"id": 7}],
            {"page": 1, "limit": 10, "total": 1, "totalPages": 1},
            ResponseShape.ENVELOPED_ITEMS,
        ),
        (
            {"data": [{"id": 1}, {"id": 2}]},
            [{"id": 1}, {"id": 2}],
            {"page": 1, "limit": 2, "total": 2, "totalPages": 1},
            ResponseShape.FLAT,
        ),
        (
            {"data": {"total_value": 1200}},
            {"total_value": 1200},
            {"page": 1, "limit": 10, "total": 0, "totalPages": 1},
            ResponseShape.UNKNOWN,
        ),
        (
            [{"id": 1}, {"id": 2}, {"id": 3}],
            [{"id": 1}, {"id": 2}, {"id": 3}],
            {"page": 1, "limit": 10, "total": 3, "totalPages": 1},
            ResponseShape.BARE,
        ),
    ],
)
def test_normalize_shapes(
    response: object, items: object, page_info: dict[str, int], shape: ResponseShape
) -> None:
    page = normalize_response(response)

    assert page.shape == shape
    assert page.items == items
    assert page.page_info.to_wire() == page_info


def test_data_envelope_wins_over_items() -> None:
    response = {
        "data": {
            "data": [{"id": 1}],
            "items": [{"id": 2}],
            "pagination": {"page": 1, "limit": 10, "total": 1, "totalPages": 1},
        }
    }
    assert normalize_response(response).items == [{"id": 1}]


def test_empty_data_list_with_pagination_is_enveloped() -> None:
    response = {"data": {"data": [], "pagination": {"page": 3, "limit": 10, "total": 20, "totalPages": 2}}}

    page = normalize_response(response)

    assert page.shape == ResponseShape.ENVELOPED_DATA
    assert page.items == []
    assert page.page_info == PageInfo(page=3, limit=10, total=20, total_pages=2)


def test_missing_pagination_falls_through_to_unknown() -> None:
    response = {"data": {"data": [{"id": 1}]}}

    assert classify_response(response) == ResponseShape.UNKNOWN
    assert normalize_response(response).items == {"data": [{"id": 1}]}


def test_empty_flat_list() -> None:
    page = normalize_response({"data": []})

    assert page.items == []
    assert page.page_info.to_wire() == {"page": 1, "limit": 0, "total": 0, "totalPages": 1}


def test_null_data_is_bare() -> None:
    response = {"data": None}

    page = normalize_response(response)

    assert page.shape == ResponseShape.BARE
    assert page.items == response


def test_none_response() -> None:
    page = normalize_response(None)

    assert page.items == []
    assert page.page_info.total == 0


def test_numeric_strings_in_pagination_are_coerced() -> None:
    response = {"data": {"data": [], "pagination": {"page": "2", "limit": "10", "total": "15", "totalPages": "2"}}}

    assert normalize_response(response).page_info == PageInfo(page=2, limit=10, total=15, total_pages=2)


def test_invalid_pagination_raises() -> None:
    response = {"data": {"data": [], "pagination": {"page": "first"}}}

    with pytest.raises(ValidationError):
        normalize_response(response)


def test_page_info_from_total() -> None:
    info = PageInfo.from_total(page=1, limit=10, total=21)

    assert info.total_pages == 3
    assert info.has_next()
    assert not info.has_prev()
    assert PageInfo.from_total(page=1, limit=0, total=5).total_pages == 0
    assert PageInfo.empty().to_wire() == {"page": 1, "limit": 10, "total": 0, "totalPages": 0}


def test_unknown_string_payload_counts_its_length() -> None:
    page = normalize_response({"data": "abc"})

    assert page.shape == ResponseShape.UNKNOWN
    assert page.items == "abc"
    assert page.page_info.to_wire() == {"page": 1, "limit": 10, "total": 3, "totalPages": 1}


@pytest.mark.parametrize("payload", [0, "", False])
def test_falsy_scalar_data_is_treated_as_missing(payload: object) -> None:
    response = {"data": payload}

    page = normalize_response(response)

    assert page.shape == ResponseShape.BARE
    assert page.items == response
    assert page.page_info.total == 0


def test_empty_mapping_data_is_unknown() -> None:
    page = normalize_response({"data": {}})

    assert page.shape == ResponseShape.UNKNOWN
    assert page.items == {}


def test_out_of_range_pagination_is_reflected_as_reported() -> None:
    response = {"data": {"data": [{"id": 1}], "pagination": {"page": -1, "limit": 10, "total": 1, "totalPages": 1}}}

    page = normalize_response(response)

    assert page.items == [{"id": 1}]
    assert page.page_info.page == -1
