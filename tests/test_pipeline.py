"""Tests for the CSV row source and the import pipeline entry points.

Covers record reading (header skipping, blank lines, strict width checks,
tokenization and decoding failures) and the parse_* / iter_card_sets
functions end to end on a small sheet export.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

import io

import pytest

from controversy.ingest.pipeline import card_sets_to_json, iter_card_sets, parse_csv_file, parse_rows
from controversy.ingest.reader import RowReadError, iter_rows, open_rows
from controversy.ingest.schema import Suite


def read_all(text: str, **kwargs) -> list[list[str]]:
    """Read every row of a CSV string."""
    return list(iter_rows(io.StringIO(text), **kwargs))


# ===========================================================================
# iter_rows tests
# ===========================================================================


class TestIterRows:

    def test_header_skipped_by_default(self):
        assert read_all("h1,h2\na,b\n") == [["a", "b"]]

    def test_header_kept_when_requested(self):
        assert read_all("h1,h2\na,b\n", skip_header_row=False) == [["h1", "h2"], ["a", "b"]]

    def test_quoted_fields(self):
        assert read_all('h,h\n"a, b","say ""hi"""\n') == [["a, b", 'say "hi"']]

    def test_blank_lines_skipped(self):
        assert read_all("h,h\n\na,b\n\n") == [["a", "b"]]

    def test_empty_input(self):
        assert read_all("") == []

    def test_width_mismatch_is_fatal(self):
        with pytest.raises(RowReadError) as excinfo:
            read_all("h1,h2\na,b\nc\n")
        assert excinfo.value.line == 3

    def test_width_mismatch_allowed_when_lenient(self):
        assert read_all("h1,h2\na,b\nc\n", strict=False) == [["a", "b"], ["c"]]

    def test_bad_quoting_is_fatal(self):
        with pytest.raises(RowReadError):
            read_all('h,h\n"a"b,c\n')

    def test_row_read_error_is_value_error(self):
        assert issubclass(RowReadError, ValueError)

    def test_rows_yielded_lazily(self):
        """Rows before a bad record are produced before the error."""
        rows = iter_rows(io.StringIO("h,h\na,b\nc\n"))
        assert next(rows) == ["a", "b"]
        with pytest.raises(RowReadError):
            next(rows)


class TestOpenRows:

    def test_bom_stripped(self, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_bytes("\ufeffSet,Title,Special\n".encode("utf-8"))
        assert list(open_rows(path, skip_header_row=False)) == [["Set", "Title", "Special"]]

    def test_invalid_utf8_is_fatal(self, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes("h,h\nCafé,x\n".encode("latin-1"))
        with pytest.raises(RowReadError):
            list(open_rows(path))

    def test_invalid_utf8_reports_its_own_line(self, tmp_path):
        """The reported line is the bad record, not wherever decoding had read ahead to."""
        path = tmp_path / "late_latin1.csv"
        good = "".join(f"Prompt,card {i},\n" for i in range(500))
        path.write_bytes(("h,h,h\n" + good).encode("utf-8") + "Prompt,Caf\u00e9,\n".encode("latin-1"))
        with pytest.raises(RowReadError) as excinfo:
            list(open_rows(path))
        assert excinfo.value.line == 502
        assert "invalid UTF-8" in str(excinfo.value)

    def test_rows_before_invalid_utf8_still_yielded(self, tmp_path):
        path = tmp_path / "tail_latin1.csv"
        path.write_bytes(b"h,h\nok,row\nCaf\xe9,x\n")
        rows = open_rows(path)
        assert next(rows) == ["ok", "row"]
        with pytest.raises(RowReadError) as excinfo:
            next(rows)
        assert excinfo.value.line == 3


# ===========================================================================
# Pipeline tests
# ===========================================================================


class TestParseCsvFile:

    def test_set_names_and_order(self, two_decks_csv):
        sets = parse_csv_file(two_decks_csv)
        assert [s.name for s in sets] == ["Main Deck", "Expansion One", "Second Deck"]

    def test_card_counts(self, two_decks_csv):
        counts = {s.name: len(s.cards) for s in parse_csv_file(two_decks_csv)}
        assert counts == {"Main Deck": 3, "Expansion One": 4, "Second Deck": 1}

    def test_main_deck_cards(self, two_decks_csv):
        main = parse_csv_file(two_decks_csv)[0]
        assert [(c.suite, c.text, c.special) for c in main.cards] == [
            (Suite.PROMPT, "Why can't I sleep at night?", ""),
            (Suite.RESPONSE, "Flying sex snakes.", ""),
            (Suite.PROMPT, "I drink to forget ____.", "PICK 1"),
        ]

    def test_quoted_card_text(self, two_decks_csv):
        expansion = parse_csv_file(two_decks_csv)[1]
        assert expansion.cards[-1].text == "Not giving a shit, honestly."

    def test_editions(self, two_decks_csv):
        main = parse_csv_file(two_decks_csv)[0]
        labels = {e.id: e.label for e in main.editions}
        assert sorted(labels.values()) == ["UK", "US"]
        assert [sorted(labels[e] for e in c.editions) for c in main.cards] == [["UK", "US"], ["US"], ["UK"]]

    def test_header_row_not_needed(self, two_decks_csv):
        """The leading 'Exported' record carries no markers, so keeping it changes nothing."""
        sets = parse_csv_file(two_decks_csv, skip_header_row=False)
        assert [s.name for s in sets] == ["Main Deck", "Expansion One", "Second Deck"]

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("h,h,h\nSet,Title,Special\nPrompt,x\n", encoding="utf-8")
        with pytest.raises(RowReadError):
            parse_csv_file(path)


class TestParseRows:

    def test_end_to_end_scenario(self):
        sets = parse_rows([["Set", "Title", "Special"], ["Prompt", "What is red?", ""], ["Set", "Title2", "Special"]])
        assert [(s.name, len(s.cards)) for s in sets] == [("Title", 1), ("Title2", 0)]

    def test_no_rows(self):
        assert parse_rows([]) == []


class TestIterCardSets:

    def test_same_result_as_parse_rows(self, two_decks_csv):
        streamed = [s.name for s in iter_card_sets(open_rows(two_decks_csv))]
        assert streamed == ["Main Deck", "Expansion One", "Second Deck"]

    def test_closed_sets_yielded_before_stream_ends(self):
        def rows():
            yield ["Set", "Title", "Special"]
            yield ["Prompt", "What is red?", ""]
            yield ["Set", "Title2", "Special"]
            raise RowReadError("broken record", line=4)

        stream = iter_card_sets(rows())
        first = next(stream)
        assert first.name == "Title"
        with pytest.raises(RowReadError):
            next(stream)


class TestCardSetsToJson:

    def test_suite_serialized_lowercase(self):
        sets = parse_rows([["Set", "Title", "Special"], ["Prompt", "a", ""], ["Response", "b", ""]])
        data = card_sets_to_json(sets)
        assert [c["suite"] for c in data[0]["cards"]] == ["prompt", "response"]
        assert isinstance(data[0]["id"], str)
