"""Unit tests for the fragment library and its JSON loader.

WHY: The library file is shared by the CLI and the API. A malformed file
must fail at load time with a message naming the file and the offending
fragment, never later during a render.

HOW: Tests build libraries from dicts and from temporary JSON files,
check schema validation and every LibraryError path, and render
invocations against a loaded library.

RULES:
- Schema validation uses fragment_library_schema.json shipped in the package
"""

import json

import jsonschema
import pytest

from asm_block.core.errors import LibraryError
from asm_block.core.fragments import Fragment
from asm_block.core.library import FragmentLibrary, get_schema, library_from_dict, load_library


class TestSchema:
    """The shipped schema is itself valid and accepts the fixture document."""

    def test_schema_is_valid_draft(self):
        jsonschema.Draft202012Validator.check_schema(get_schema())

    def test_fixture_document_validates(self, library_document):
        jsonschema.validate(instance=library_document, schema=get_schema())

    def test_schema_is_cached(self):
        assert get_schema() is get_schema()


class TestLibraryFromDict:
    """Building a library from an already parsed document."""

    def test_fragments_are_registered(self, library):
        assert library.names() == ["mad", "md5_f", "ret"]
        assert len(library) == 3
        assert "mad" in library
        assert "missing" not in library

    def test_description_and_params(self, library):
        mad = library.get("mad")
        assert mad.params == ("x", "y")
        assert mad.description == "multiply-add"
        assert library.get("ret").params == ()

    def test_list_body_matches_string_body(self, library, md5_round):
        assert library.get("md5_f").body == md5_round.body

    def test_missing_fragments_key(self):
        with pytest.raises(LibraryError, match="'fragments' is a required property"):
            library_from_dict({"version": "1"}, source="lib.json")

    def test_missing_body(self):
        with pytest.raises(LibraryError, match="lib.json: invalid fragment library"):
            library_from_dict({"fragments": {"f": {"params": []}}}, source="lib.json")

    def test_bad_parameter_name(self):
        document = {"fragments": {"f": {"params": ["1x"], "body": "nop"}}}
        with pytest.raises(LibraryError, match="fragments/f/params/0"):
            library_from_dict(document)

    def test_bad_fragment_name(self):
        with pytest.raises(LibraryError, match="invalid fragment library"):
            library_from_dict({"fragments": {"my-frag": {"body": "nop"}}})

    def test_unknown_property(self):
        document = {"fragments": {"f": {"body": "nop", "args": []}}}
        with pytest.raises(LibraryError, match="invalid fragment library"):
            library_from_dict(document)

    def test_body_lex_error_names_fragment(self):
        document = {"fragments": {"bad": {"body": "mov al, 'a'"}}}
        with pytest.raises(LibraryError, match="lib.json: fragment 'bad': single-quoted"):
            library_from_dict(document, source="lib.json")

    def test_not_an_object(self):
        with pytest.raises(LibraryError, match="document root"):
            library_from_dict([])


class TestLoadLibrary:
    """Loading from a JSON file on disk."""

    def test_load_file(self, library_file):
        library = load_library(library_file)
        assert library.names() == ["mad", "md5_f", "ret"]

    def test_load_accepts_str_path(self, library_file):
        assert len(load_library(str(library_file))) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(LibraryError, match="cannot read fragment library"):
            load_library(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{ not json", encoding="utf-8")
        with pytest.raises(LibraryError, match="invalid JSON"):
            load_library(path)

    def test_empty_fragment_map(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"fragments": {}}), encoding="utf-8")
        assert len(load_library(path)) == 0


class TestFragmentLibrary:
    """Registry behavior and rendering."""

    def test_duplicate_define(self, mad):
        library = FragmentLibrary([mad])
        with pytest.raises(LibraryError, match="already defined"):
            library.define(mad)

    def test_unknown_fragment_lists_available(self, library):
        with pytest.raises(LibraryError, match=r"unknown fragment 'nope'. Available: mad, md5_f, ret"):
            library.get("nope")

    def test_unknown_fragment_in_empty_library(self):
        with pytest.raises(LibraryError, match="Available: none"):
            FragmentLibrary().get("mad")

    def test_iteration_is_sorted(self):
        library = FragmentLibrary([
            Fragment.from_source("zeta", [], "nop"),
            Fragment.from_source("alpha", [], "nop"),
        ])
        assert [fragment.name for fragment in library] == ["alpha", "zeta"]

    def test_render(self, library):
        assert library.render("mad", ["{x}", "5"]) == "mul {x}, 5 \nlea {x}, [{x}+ 5 ] \n"

    def test_expand(self, library, mad):
        assert library.expand("mad", ["a", "b"]) == mad.expand("a", "b")

    def test_render_invocation(self, library):
        assert library.render_invocation("mad!({x}, 5)") == library.render("mad", ["{x}", "5"])

    def test_render_invocations_joins_with_newline(self, library):
        rendered = library.render_invocations(["mad!(eax, ebx)", "ret!()"])
        assert rendered == "mul eax , ebx \nlea eax , [eax + ebx ] \n\nret "

    def test_render_invocation_unknown_name(self, library):
        with pytest.raises(LibraryError, match="unknown fragment 'nope'"):
            library.render_invocation("nope!(a)")
