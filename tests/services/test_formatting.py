from datetime import date, datetime

import pytest

from jd_renderer.services import formatting as fmt


class TestFormatSalary:
    def test_both_bounds(self):
        assert fmt.format_salary("INR", 1200000, 1800000) == "INR 1,200,000 - 1,800,000"

    def test_only_min(self):
        assert fmt.format_salary("USD", 90000, None) == "USD 90,000+"

    def test_only_max(self):
        assert fmt.format_salary("INR", None, 500000.0) == "INR Up to 500,000"

    def test_neither(self):
        assert fmt.format_salary("INR", None, None) == "Not specified"

    def test_zero_counts_as_absent(self):
        assert fmt.format_salary("INR", 0, 0) == "Not specified"
        assert fmt.format_salary("INR", 0, 400000) == "INR Up to 400,000"

    def test_fractional_values_keep_decimals(self):
        assert fmt.format_salary("USD", 1500.5, None) == "USD 1,500.5+"


class TestFormatExperience:
    @pytest.mark.parametrize(
        "minimum, maximum, expected",
        [
            (2, 5, "2-5 years"),
            (0, 3, "Up to 3 years"),
            (3, None, "3+ years"),
            (None, 4, "Up to 4 years"),
            (None, None, "Not specified"),
            (0, None, "Not specified"),
        ],
    )
    def test_experience_forms(self, minimum, maximum, expected):
        assert fmt.format_experience(minimum, maximum) == expected


class TestFormatJobType:
    @pytest.mark.parametrize(
        "job_type, expected",
        [
            ("full_time", "Full time"),
            ("part_time", "Part Time"),
            ("contract", "Contract"),
            ("internship", "Internship"),
            ("freelance", "Freelance"),
            ("apprenticeship", "apprenticeship"),
            (None, "Not specified"),
        ],
    )
    def test_labels(self, job_type, expected):
        assert fmt.format_job_type(job_type) == expected


class TestJoinValues:
    def test_list(self):
        assert fmt.join_values(["Pune", "Remote"]) == "Pune, Remote"

    def test_string_with_set_syntax(self):
        assert fmt.join_values('{"Pune"}') == "Pune"

    def test_string_with_list_syntax(self):
        assert fmt.join_values("['B.Tech', 'M.Tech']") == "B.Tech, M.Tech"

    def test_list_items_keep_their_quotes(self):
        """Test that apostrophes inside real list values are preserved."""
        assert fmt.join_values(["Masters'", " Bachelors "]) == "Masters', Bachelors"

    def test_empty_items_are_dropped(self):
        assert fmt.join_values("Pune, , Delhi,") == "Pune, Delhi"

    @pytest.mark.parametrize("value", [None, "", [], "{}", '[""]'])
    def test_empty_falls_back(self, value):
        assert fmt.join_values(value) == "Not specified"


class TestSplitBullets:
    def test_strips_existing_markers_and_blank_lines(self):
        text = "• First\n\n- Second\n  * Third  \n•  - Fourth"

        assert fmt.split_bullets(text) == ["First", "Second", "Third", "Fourth"]

    def test_hyphenated_words_are_kept(self):
        assert fmt.split_bullets("Full-stack work") == ["Full-stack work"]

    def test_empty(self):
        assert fmt.split_bullets(None) == []
        assert fmt.split_bullets("\n  \n") == []


@pytest.mark.parametrize("count, columns", [(0, 1), (1, 1), (2, 2), (3, 3), (5, 3)])
def test_skill_columns(count, columns):
    assert fmt.skill_columns(count) == columns


def test_format_flag():
    assert fmt.format_flag(True) == "Available"
    assert fmt.format_flag(False) == "Not Available"
    assert fmt.format_flag(True, yes="Yes", no="No") == "Yes"
    assert fmt.format_flag(False, yes="Yes", no="No") == "No"


class TestDates:
    def test_iso_string(self):
        assert fmt.format_date("2025-03-05") == "March 5, 2025"

    def test_utc_z_suffix(self):
        assert fmt.parse_date("2025-04-30T00:00:00Z") == date(2025, 4, 30)
        assert fmt.format_date("2025-04-30T00:00:00Z") == "April 30, 2025"

    def test_iso_datetime_string(self):
        assert fmt.format_date("2025-12-31T18:45:00") == "December 31, 2025"

    def test_date_and_datetime(self):
        assert fmt.format_date(date(2024, 2, 29)) == "February 29, 2024"
        assert fmt.format_date(datetime(2024, 7, 1, 8, 0)) == "July 1, 2024"

    def test_unparseable_passes_through(self):
        assert fmt.format_date("next Monday") == "next Monday"

    def test_missing(self):
        assert fmt.format_date(None) == "Not specified"

    def test_parse_date_returns_none_for_garbage(self):
        assert fmt.parse_date("soon") is None

    def test_timestamp(self):
        assert fmt.format_timestamp(datetime(2025, 3, 5, 7, 4)) == "05/03/2025 07:04"
