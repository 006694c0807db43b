"""Tests for the lexical command extractor."""

import pytest

from nsmodernizer.extractor import extract_by_heuristic, extract_commands, merge_heuristics


class TestSingleWordForms:
    """Bracketed and argument-prefixed one-word commands."""

    def test_bracketed_command(self):
        assert "ns_tmpnam" in extract_commands("set dir [ns_tmpnam]\n")

    def test_bracketed_command_with_spaces(self):
        assert "ns_paren" in extract_commands("set x [ ns_paren ]")

    def test_command_at_line_start_with_variable_argument(self):
        assert "ns_mkdir" in extract_commands("proc p {dir} {\n    ns_mkdir $dir\n}\n")

    def test_command_at_start_of_text(self):
        assert "ns_mkdir" in extract_commands("ns_mkdir $foo\n")

    @pytest.mark.parametrize("argument", ["-force", "$path", "[pwd]", '"/tmp/x"'])
    def test_argument_openers(self, argument):
        assert "ns_rmdir" in extract_commands(f"\nns_rmdir {argument}\n")

    def test_nested_substitutions_are_both_found(self):
        names = extract_commands("set x [ns_puts [ns_tmpnam]]")
        assert {"ns_puts", "ns_tmpnam"} <= names

    def test_name_must_start_with_ns(self):
        assert extract_commands("set x [string trim $y]\nfile mkdir $d\n") == set()


class TestTwoWordForms:
    """Command plus lowercase subcommand."""

    def test_subcommand_in_proc_body(self):
        text = "proc stop {tid} {\n    ns_thread join $tid\n}\n"
        assert "ns_thread join" in extract_commands(text)

    def test_subcommand_in_brackets(self):
        assert "ns_set new" in extract_commands("set s [ns_set new headers]")

    def test_spaces_between_words_collapse(self):
        assert "ns_set new" in extract_commands("set s [ns_set    new]")

    def test_subcommand_must_end_at_word_boundary(self):
        names = extract_commands("\nns_set newer\n")
        assert "ns_set newer" in names
        assert "ns_set new" not in names

    def test_subcommand_followed_by_digit_is_not_a_word(self):
        assert extract_commands("\nns_info url2file /x\n") == set()


class TestDeduplication:
    def test_repeated_occurrences_yield_one_name(self):
        text = "\nns_mkdir $a\nns_mkdir $b\nset c [ns_mkdir $d]\n"
        assert extract_commands(text) == {"ns_mkdir"}

    def test_heuristics_report_separately(self):
        found = extract_by_heuristic("set d [ns_tmpnam]\nns_set new\n")
        assert found["bracketed"] == {"ns_tmpnam"}
        assert "ns_set new" in found["subcommand"]

    def test_commands_are_the_union_of_heuristics(self):
        text = "set d [ns_tmpnam]\nns_set new\nns_mkdir $d\n"
        assert merge_heuristics(extract_by_heuristic(text)) == extract_commands(text)
        assert {"ns_tmpnam", "ns_set new", "ns_mkdir"} <= extract_commands(text)


class TestDynamicInvocationIsNotDetected:
    """Runtime-built command names are out of reach of a lexical scan."""

    def test_command_name_held_in_variable(self):
        text = "set cmd ns_mkdir\n$cmd $dir\n"
        assert "ns_mkdir" not in extract_commands(text)

    def test_command_name_built_by_concatenation(self):
        text = 'set op mkdir\neval "ns_$op $dir"\n'
        assert "ns_mkdir" not in extract_commands(text)

    def test_command_name_assembled_in_string(self):
        text = "set cmd [string cat ns_ mkdir]\n{*}$cmd $dir\n"
        assert "ns_mkdir" not in extract_commands(text)
