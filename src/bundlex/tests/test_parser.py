import pytest

from bundlex.parser import (
    NAMING_CONVENTIONS,
    BundleKind,
    BundleName,
    BundleNameParser,
    InvalidBundleName,
    parse,
    try_parse,
)


@pytest.mark.parametrize(
    "filename, kind, character, variant",
    [
        ("art_live2d_characters_alice_07.bundle", BundleKind.ART, "alice", "07"),
        ("build_animations2d_characters_bob_3.bundle", BundleKind.ANIMATION, "bob", "3"),
        ("build_prefabs_live2d_characters_char2d_carol_100.bundle", BundleKind.PREFAB, "carol", "100"),
    ],
)
def test_each_convention(filename, kind, character, variant):
    parser = BundleNameParser(filename)
    assert parser.is_valid
    assert parser.kind is kind
    assert parser.character_name == character
    assert parser.variant_id == variant
    assert parser.full_identifier == f"{character}_{variant}"
    assert str(parser) == f"{character}_{variant}"


def test_conventions_are_ordered():
    assert [kind for kind, _ in NAMING_CONVENTIONS] == [BundleKind.ART, BundleKind.ANIMATION, BundleKind.PREFAB]


def test_animation_name_not_picked_up_by_other_patterns():
    name = "build_animations2d_characters_bob_3.bundle"
    art_pattern = dict(NAMING_CONVENTIONS)[BundleKind.ART]
    prefab_pattern = dict(NAMING_CONVENTIONS)[BundleKind.PREFAB]
    assert art_pattern.search(name) is None
    assert prefab_pattern.search(name) is None


@pytest.mark.parametrize("filename", [None, "", "random_file.txt", "art_live2d_characters_alice_x.bundle"])
def test_invalid_inputs(filename):
    parser = BundleNameParser(filename)
    assert not parser.is_valid
    assert parser.character_name is None
    assert parser.variant_id is None
    assert parser.full_identifier is None
    assert parser.kind is None
    assert str(parser) == "Invalid"
    assert isinstance(parser.result, InvalidBundleName)


def test_default_constructor_is_invalid():
    assert not BundleNameParser().is_valid


def test_case_insensitive_match_keeps_captured_case():
    upper = BundleNameParser("ART_LIVE2D_CHARACTERS_Foo_12.BUNDLE")
    lower = BundleNameParser("art_live2d_characters_Foo_12.bundle")
    assert upper.is_valid and lower.is_valid
    assert upper.character_name == lower.character_name == "Foo"
    assert upper.variant_id == lower.variant_id == "12"


def test_substring_match_is_not_anchored():
    parser = BundleNameParser("assets/aa/art_live2d_characters_alice_07.bundle.bak")
    assert parser.is_valid
    assert parser.full_identifier == "alice_07"


def test_underscore_in_name_is_rejected():
    # [^_]+ stops at the underscore in "al_ice", then \d+ meets "ice" and fails
    parser = BundleNameParser("art_live2d_characters_al_ice_07.bundle")
    assert not parser.is_valid


def test_idempotent_construction():
    name = "build_prefabs_live2d_characters_char2d_carol_100.bundle"
    a = BundleNameParser(name)
    b = BundleNameParser(name)
    assert a == b
    assert hash(a) == hash(b)
    assert (a.character_name, a.variant_id, a.full_identifier, a.is_valid) == (
        b.character_name,
        b.variant_id,
        b.full_identifier,
        b.is_valid,
    )


def test_matches_character():
    parser = BundleNameParser("art_live2d_characters_Alice_07.bundle")
    assert parser.matches_character("alice", "07")
    assert parser.matches_character("ALICE", "07")
    assert not parser.matches_character("alice", "7")
    assert not parser.matches_character("bob", "07")
    assert not parser.matches_character(None, "07")


def test_matches_character_on_invalid_is_false():
    parser = BundleNameParser("random_file.txt")
    assert not parser.matches_character("alice", "07")
    assert not parser.matches_character(None, None)


def test_matches_parser_across_bundle_kinds():
    art = BundleNameParser("art_live2d_characters_alice_07.bundle")
    anim = BundleNameParser("build_animations2d_characters_ALICE_07.bundle")
    assert art.matches_parser(anim)
    assert anim.matches_parser(art)


def test_matches_parser_false_when_either_side_invalid():
    valid = BundleNameParser("art_live2d_characters_alice_07.bundle")
    invalid = BundleNameParser("")
    assert not valid.matches_parser(invalid)
    assert not invalid.matches_parser(valid)
    assert not invalid.matches_parser(invalid)
    assert not valid.matches_parser(None)


def test_try_parse():
    ok, parser = try_parse("build_animations2d_characters_bob_3.bundle")
    assert ok is True
    assert parser.full_identifier == "bob_3"

    ok, parser = BundleNameParser.try_parse("random_file.txt")
    assert ok is False
    assert not parser.is_valid


def test_parse_returns_tagged_result():
    result = parse("art_live2d_characters_alice_07.bundle")
    assert isinstance(result, BundleName)
    assert result == BundleName("alice", "07", BundleKind.ART)
    assert result.full_identifier == "alice_07"
    assert isinstance(parse(None), InvalidBundleName)


def test_result_is_immutable():
    result = parse("art_live2d_characters_alice_07.bundle")
    with pytest.raises(AttributeError):
        result.character_name = "bob"
