import pytest

from core.filters import (
    ALL_DEPARTMENTS,
    ALL_STATUSES,
    DynamicFilter,
    FilterCriteria,
    apply_filters,
    department_options,
    drilldown,
    flagged_subset,
    matches,
    matches_date_range,
    matches_department,
    matches_dynamic,
    matches_flagged,
    matches_search,
    matches_status,
    normalize_filters,
)


pytestmark = pytest.mark.unit


def _ids(records):
    return [r.id for r in records]


def test_default_criteria_match_everything(requests_sample):
    assert apply_filters(requests_sample, FilterCriteria()) == requests_sample


def test_search_covers_protocol_subject_analyst_and_neighborhood(request_factory):
    r = request_factory(1, protocol="2024.000777", subject="Queimada", analyst_name="Juliana Prado",
                        neighborhood="Heliópolis", city="Mesquita")
    assert matches_search(r, FilterCriteria(search="000777"))
    assert matches_search(r, FilterCriteria(search="QUEIM"))
    assert matches_search(r, FilterCriteria(search="juliana"))
    assert matches_search(r, FilterCriteria(search="heliópolis"))
    assert not matches_search(r, FilterCriteria(search="mesquita"))


def test_status_and_department_sentinels_are_vacuous(request_factory):
    r = request_factory(status="Concluído", department="SUBLIC")
    assert matches_status(r, FilterCriteria(status=ALL_STATUSES))
    assert matches_status(r, FilterCriteria(status="Concluído"))
    assert not matches_status(r, FilterCriteria(status="concluído"))
    assert matches_department(r, FilterCriteria(department=ALL_DEPARTMENTS))
    assert not matches_department(r, FilterCriteria(department="SUBFIS"))


def test_dynamic_filter_matches_exact_or_case_insensitive(request_factory):
    r = request_factory(neighborhood="Areia Branca")
    assert matches_dynamic(r, None)
    assert matches_dynamic(r, DynamicFilter("neighborhood", "Areia Branca"))
    assert matches_dynamic(r, DynamicFilter("neighborhood", "AREIA BRANCA"))
    assert not matches_dynamic(r, DynamicFilter("neighborhood", "Centro"))


def test_dynamic_filter_on_unknown_field_compares_empty_string(request_factory):
    r = request_factory()
    assert not matches_dynamic(r, DynamicFilter("nao_existe", "x"))
    assert matches_dynamic(r, DynamicFilter("nao_existe", ""))


def test_date_range_is_inclusive_and_lexicographic(request_factory):
    r = request_factory(opened_date="2024-02-15")
    assert matches_date_range(r, FilterCriteria(start_date="2024-02-15", end_date="2024-02-15"))
    assert not matches_date_range(r, FilterCriteria(start_date="2024-02-16"))
    assert not matches_date_range(r, FilterCriteria(end_date="2024-02-14"))


def test_empty_opened_date_sorts_before_every_bound(request_factory):
    r = request_factory(opened_date="")
    assert not matches_date_range(r, FilterCriteria(start_date="2024-01-01"))
    assert matches_date_range(r, FilterCriteria(end_date="2024-01-01"))
    assert matches_date_range(r, FilterCriteria())


def test_flagged_predicate(request_factory):
    flagged = request_factory(description="Chamado da LINHA VERDE")
    plain = request_factory(description="Chamado presencial")
    on = FilterCriteria(only_flagged=True)
    assert matches_flagged(flagged, on)
    assert not matches_flagged(plain, on)
    assert matches_flagged(plain, FilterCriteria())


PREDICATE_CASES = [
    ("search", FilterCriteria(search="queimada"), None),
    ("status", FilterCriteria(status="Concluído"), None),
    ("department", FilterCriteria(department="SUBLIC"), None),
    ("date", FilterCriteria(start_date="2024-02-01", end_date="2024-03-31"), None),
    ("flagged", FilterCriteria(only_flagged=True), None),
    ("dynamic", FilterCriteria(), DynamicFilter("analyst_name", "fernanda rocha")),
]


@pytest.mark.parametrize("name,criteria,dynamic", PREDICATE_CASES, ids=[c[0] for c in PREDICATE_CASES])
def test_single_criterion_removes_exactly_its_failures(requests_sample, name, criteria, dynamic):
    single = {
        "search": lambda r: matches_search(r, criteria),
        "status": lambda r: matches_status(r, criteria),
        "department": lambda r: matches_department(r, criteria),
        "date": lambda r: matches_date_range(r, criteria),
        "flagged": lambda r: matches_flagged(r, criteria),
        "dynamic": lambda r: matches_dynamic(r, dynamic),
    }[name]
    expected = [r.id for r in requests_sample if single(r)]
    assert _ids(apply_filters(requests_sample, criteria, dynamic)) == expected
    assert 0 < len(expected) < len(requests_sample)


def test_matches_is_conjunction_of_all_predicates(requests_sample):
    criteria = FilterCriteria(search="a", status="Concluído", start_date="2024-01-01", only_flagged=True)
    dynamic = DynamicFilter("subject", "poda de árvore")
    for r in requests_sample:
        expected = all(
            [
                matches_search(r, criteria),
                matches_status(r, criteria),
                matches_department(r, criteria),
                matches_dynamic(r, dynamic),
                matches_date_range(r, criteria),
                matches_flagged(r, criteria),
            ]
        )
        assert matches(r, criteria, dynamic) == expected
    assert _ids(apply_filters(requests_sample, criteria, dynamic)) == ["0"]


def test_drilldown_ignores_others_bucket():
    assert drilldown("neighborhood", "Outros") is None
    assert drilldown("neighborhood", "Centro") == DynamicFilter("neighborhood", "Centro")


def test_flagged_subset_ignores_toggle(requests_sample):
    assert _ids(flagged_subset(requests_sample)) == ["0", "2"]


def test_options_start_with_sentinel_and_keep_first_seen_order(requests_sample):
    assert department_options(requests_sample) == [ALL_DEPARTMENTS, "SUBFIS", "SUBLIC"]


def test_normalize_filters_merges_onto_base():
    base = FilterCriteria(search="poda", status="Concluído")
    out = normalize_filters({"status": None, "only_flagged": "true", "unknown": 1}, base=base)
    assert out == FilterCriteria(search="poda", status="", only_flagged=True)
    assert normalize_filters({}) == FilterCriteria()
