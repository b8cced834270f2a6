from __future__ import annotations

import copy
from datetime import date

import pytest

from flood_reports.domain.models import CleanedRecord, ValidatedRecord
from flood_reports.pipeline import (
    INVALID_DATE,
    MISSING_FIELD,
    NEGATIVE_DURATION,
    NON_NUMERIC,
    check_record,
    derive_fields,
    filter_by_year,
    normalize,
    parse_date,
    parse_number,
    process_records,
    validate,
    validate_with_report,
)


class TestParsing:
    @pytest.mark.parametrize(
        "text, expected",
        [("100", 100.0), (" 2.5 ", 2.5), ("1e3", 1000.0), ("-40", -40.0)],
    )
    def test_parse_number_accepts_finite_numbers(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1,000", "nan", "inf", "-Infinity", "1_000"])
    def test_parse_number_rejects_everything_else(self, text):
        assert parse_number(text) is None

    def test_parse_date_truncates_datetimes_to_calendar_day(self):
        assert parse_date("2021-01-01T23:59:00") == date(2021, 1, 1)
        assert parse_date("2021-02-28") == date(2021, 2, 28)

    @pytest.mark.parametrize("text", ["", "2021-02-30", "01/02/2021", "yesterday"])
    def test_parse_date_rejects_invalid_dates(self, text):
        assert parse_date(text) is None


class TestValidate:
    def test_valid_record_passes(self, make_raw):
        assert check_record(make_raw()) is None
        assert len(validate([make_raw()])) == 1

    def test_zero_day_project_is_valid(self, make_raw):
        record = make_raw(StartDate="2022-05-05", ActualCompletionDate="2022-05-05")
        assert check_record(record) is None

    @pytest.mark.parametrize(
        "overrides, reason",
        [
            ({"Region": "   "}, MISSING_FIELD),
            ({"FundingYear": ""}, MISSING_FIELD),
            ({"ContractCost": "n/a"}, NON_NUMERIC),
            ({"ApprovedBudgetForContract": "nan"}, NON_NUMERIC),
            ({"StartDate": "2022-13-01"}, INVALID_DATE),
            ({"ActualCompletionDate": "soon"}, INVALID_DATE),
            ({"StartDate": "2022-04-16", "ActualCompletionDate": "2022-04-15"}, NEGATIVE_DURATION),
        ],
    )
    def test_invalid_records_are_bucketed_by_first_failing_check(self, make_raw, overrides, reason):
        assert check_record(make_raw(**overrides)) == reason

    def test_missing_column_counts_as_missing_field(self, make_raw):
        record = make_raw()
        del record["StartDate"]
        assert check_record(record) == MISSING_FIELD

    def test_checks_short_circuit_in_order(self, make_raw):
        record = make_raw(Region="", ContractCost="n/a", StartDate="bad")
        assert check_record(record) == MISSING_FIELD

    def test_report_counts_valid_and_invalid(self, make_raw):
        records = [
            make_raw(),
            make_raw(Region=""),
            make_raw(ContractCost="x"),
            make_raw(ContractCost="y"),
            make_raw(),
        ]
        valid, report = validate_with_report(records)

        assert len(valid) == 2
        assert report.total == 5
        assert report.valid == 2
        assert report.invalid == 3
        assert report.invalid_by_reason == {MISSING_FIELD: 1, NON_NUMERIC: 2}

    def test_validation_does_not_mutate_input(self, make_raw):
        records = [make_raw(), make_raw(ContractCost="bad")]
        snapshot = copy.deepcopy(records)
        validate(records)
        assert records == snapshot


class TestFilterByYear:
    def test_bounds_are_inclusive(self, make_raw):
        years = ["2020", "2021", "2022", "2023", "2024"]
        records = validate([make_raw(FundingYear=year) for year in years])

        kept = filter_by_year(records, 2021, 2023)

        assert [r.get("FundingYear") for r in kept] == ["2021", "2022", "2023"]

    def test_defaults_to_2021_through_2023(self, make_raw):
        records = validate([make_raw(FundingYear="2020"), make_raw(FundingYear="2023")])
        assert [r.get("FundingYear") for r in filter_by_year(records)] == ["2023"]

    def test_non_numeric_year_is_excluded(self, make_raw):
        records = validate([make_raw(FundingYear="FY22")])
        assert filter_by_year(records) == []


class TestDeriveAndNormalize:
    def test_derived_fields_are_exact(self, make_raw):
        records = validate(
            [
                make_raw(
                    ApprovedBudgetForContract="100",
                    ContractCost="80",
                    StartDate="2021-01-01",
                    ActualCompletionDate="2021-01-11",
                ),
                make_raw(
                    ApprovedBudgetForContract="200",
                    ContractCost="220",
                    StartDate="2021-02-01",
                    ActualCompletionDate="2021-02-01",
                ),
            ]
        )

        enriched = derive_fields(records)

        assert [r.cost_savings for r in enriched] == [20.0, -20.0]
        assert [r.completion_delay_days for r in enriched] == [10, 0]

    def test_derivation_tolerates_missing_fields(self):
        enriched = derive_fields([ValidatedRecord(raw={"Region": "X"})])
        assert enriched[0].cost_savings == 0.0
        assert enriched[0].completion_delay_days == 0

    def test_derivation_builds_new_values(self, make_raw):
        validated = validate([make_raw()])
        enriched = derive_fields(validated)
        assert enriched[0].raw == validated[0].raw
        assert not hasattr(validated[0], "cost_savings")

    def test_normalize_coerces_types_without_changing_values(self, make_raw):
        enriched = derive_fields(validate([make_raw(Remarks="near river")]))

        (record,) = normalize(enriched)

        assert isinstance(record, CleanedRecord)
        assert record.funding_year == 2022
        assert record.approved_budget == 1_000_000.0
        assert record.contract_cost == 950_000.0
        assert record.cost_savings == 50_000.0
        assert record.start_date == date(2022, 3, 1)
        assert record.actual_completion_date == date(2022, 4, 15)
        assert record.completion_delay_days == 45
        assert record.province == "Pampanga"
        assert record.district is None
        assert record.extra == {"Remarks": "near river"}

    def test_normalize_rejects_non_numeric_year(self, make_raw):
        enriched = derive_fields(validate([make_raw(FundingYear="unknown")]))
        with pytest.raises(ValueError):
            normalize(enriched)


class TestProcessRecords:
    def test_threads_all_stages_and_reports_drops(self, make_raw):
        records = [
            make_raw(FundingYear="2021"),
            make_raw(FundingYear="2019"),
            make_raw(ContractCost=""),
            make_raw(StartDate="2022-05-01", ActualCompletionDate="2022-04-01"),
        ]

        result = process_records(records)

        assert len(result.records) == 1
        assert result.dropped == 2
        assert result.filtered_out == 1
        assert result.validation.total == 4

    def test_every_cleaned_record_satisfies_invariants(self, make_raw):
        records = [
            make_raw(ApprovedBudgetForContract="500", ContractCost="650"),
            make_raw(StartDate="2022-01-01", ActualCompletionDate="2022-12-31"),
        ]
        for record in process_records(records).records:
            assert record.completion_delay_days >= 0
            assert record.cost_savings == record.approved_budget - record.contract_cost
