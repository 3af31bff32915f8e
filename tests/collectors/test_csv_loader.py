"""
Tests for the board snapshot loader
"""

import logging

import pytest
from conftest import BOARD_CSV_HEADER, utc

from kanban_metrics.collectors import CSVBoardLoader, Delimiter, detect_delimiter, load_work_items
from kanban_metrics.collectors.csv_loader import parse_bool, parse_estimate, parse_owners, parse_string_list
from kanban_metrics.domain import MetricsValidationError


class TestDetectDelimiter:
    """Test detect_delimiter function"""

    def test_comma(self):
        """Test comma-delimited sample"""
        assert detect_delimiter("id,name,estimate\n1,Login,3\n") is Delimiter.COMMA

    def test_tab(self):
        """Test tab-delimited sample"""
        assert detect_delimiter("id\tname\testimate\n1\tLogin, part 1\t3\n") is Delimiter.TAB

    def test_semicolon(self):
        """Test semicolon-delimited sample"""
        assert detect_delimiter("id;name;estimate\n1;Login;3\n") is Delimiter.SEMICOLON

    def test_tie_prefers_comma(self):
        """Test ties and separator-free samples fall back to comma"""
        assert detect_delimiter("a,b;c\n") is Delimiter.COMMA
        assert detect_delimiter("id\n1\n") is Delimiter.COMMA

    def test_only_first_lines_inspected(self):
        """Test lines past the sample window are ignored"""
        sample = "\n".join(["a;b;c"] * 5 + ["x,y,z,w,v,u,t,s,r,q,p,o"] * 3)
        assert detect_delimiter(sample) is Delimiter.SEMICOLON


class TestCellParsers:
    """Test field coercion helpers"""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("TRUE", True), ("true", True), ("True", True), ("FALSE", False), ("yes", False), ("", False)],
    )
    def test_parse_bool(self, value, expected):
        """Test only TRUE (any case) is true"""
        assert parse_bool(value) is expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("3", 3.0), ("2.5", 2.5), ("", 0.0), ("abc", 0.0), ("-2", 0.0), ("nan", 0.0), ("inf", 0.0)],
    )
    def test_parse_estimate(self, value, expected):
        """Test invalid estimates become 0"""
        assert parse_estimate(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("alice,bob", ("alice", "bob")),
            ("alice; bob", ("alice", "bob")),
            ("alice bob", ("alice", "bob")),
            ("alice", ("alice",)),
            ("", ()),
        ],
    )
    def test_parse_owners(self, value, expected):
        """Test the first separator present is used"""
        assert parse_owners(value) == expected

    def test_parse_string_list(self):
        """Test labels are trimmed and empties dropped"""
        assert parse_string_list(" ad-hoc-request , urgent,,") == ("ad-hoc-request", "urgent")


class TestCSVBoardLoader:
    """Test CSVBoardLoader"""

    def test_loads_rows(self, board_csv):
        """Test valid rows become work items in file order"""
        items = CSVBoardLoader(board_csv).load()

        assert [item.id for item in items] == ["101", "102", "103"]
        login, crash, refactor = items
        assert login.owners == ("alice", "bob")
        assert login.estimate == 3.0
        assert login.is_completed is True
        assert login.created_at == utc(2024, 4, 1, 9)
        assert login.completed_at == utc(2024, 4, 10, 17)
        assert login.team == "Web"

        assert crash.is_completed is True
        assert crash.is_ad_hoc is True
        assert crash.started_at is None

        assert refactor.estimate == 0.0
        assert refactor.is_completed is False
        assert refactor.state == "In Progress"
        assert refactor.completed_at is None

    def test_skipped_row_logged(self, board_csv, caplog):
        """Test a row missing its id is skipped with a warning"""
        with caplog.at_level(logging.WARNING):
            items = CSVBoardLoader(board_csv).load()

        assert len(items) == 3
        assert "missing required field: id" in caplog.text

    def test_semicolon_file(self, tmp_path):
        """Test auto-detection of a semicolon export"""
        path = tmp_path / "board.csv"
        path.write_text(
            "id;name;owners;estimate;is_completed;completed_at\n"
            "7;Export, phase 2;alice,bob;5;TRUE;2024/04/10 12:00:00\n",
            encoding="utf-8",
        )
        items = load_work_items(path)

        assert len(items) == 1
        assert items[0].name == "Export, phase 2"
        assert items[0].owners == ("alice", "bob")
        assert items[0].completion_time == utc(2024, 4, 10, 12)

    def test_explicit_tab_delimiter(self, tmp_path):
        """Test an explicit tab delimiter"""
        path = tmp_path / "board.tsv"
        path.write_text(
            "id\tname\testimate\tis_completed\tcompleted_at\n8\tTabbed\t2\tFALSE\t\n",
            encoding="utf-8",
        )
        items = load_work_items(path, "tab")
        assert [(item.id, item.name, item.estimate) for item in items] == [("8", "Tabbed", 2.0)]

    def test_bad_timestamp_becomes_none(self, tmp_path):
        """Test an unparseable timestamp cell is treated as absent"""
        path = tmp_path / "board.csv"
        path.write_text(
            "id,name,estimate,is_completed,completed_at\n9,Odd date,1,TRUE,last tuesday\n",
            encoding="utf-8",
        )
        items = load_work_items(path)
        assert items[0].completed_at is None

    def test_utf8_bom_header(self, tmp_path):
        """Test a byte-order mark does not corrupt the first column name"""
        path = tmp_path / "board.csv"
        path.write_bytes(("\ufeff" + "id,name,estimate,is_completed,completed_at\n1,Bom,1,TRUE,\n").encode("utf-8"))
        assert [item.id for item in load_work_items(path)] == ["1"]

    def test_missing_required_column(self, tmp_path):
        """Test a missing required column is reported by name"""
        path = tmp_path / "board.csv"
        path.write_text("id,name,estimate,is_completed\n1,x,1,TRUE\n", encoding="utf-8")

        with pytest.raises(ValueError, match="required column 'completed_at' not found in CSV headers"):
            load_work_items(path)

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError"""
        with pytest.raises(FileNotFoundError, match="does not exist"):
            load_work_items(tmp_path / "missing.csv")

    def test_directory(self, tmp_path):
        """Test a directory path is rejected"""
        with pytest.raises(IsADirectoryError, match="is a directory"):
            load_work_items(tmp_path)

    def test_empty_file(self, tmp_path):
        """Test an empty file is a ValueError"""
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="error reading CSV file"):
            load_work_items(path)

    def test_header_only(self, tmp_path):
        """Test a header without rows loads no items"""
        path = tmp_path / "board.csv"
        path.write_text(BOARD_CSV_HEADER + "\n", encoding="utf-8")
        assert load_work_items(path) == []

    def test_invalid_delimiter_name(self, board_csv):
        """Test unknown delimiter names are rejected"""
        with pytest.raises(MetricsValidationError, match="invalid delimiter type: pipe"):
            CSVBoardLoader(board_csv, "pipe")
