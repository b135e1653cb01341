from html_translate.languages import LANGUAGE_NAMES, describe_languages, resolve_language


def test_known_codes_resolve_to_display_names():
    assert resolve_language("tr").name == "Turkish"
    assert resolve_language("nl").name == "Dutch"
    assert resolve_language("TR").name == "Turkish"


def test_unknown_code_is_its_own_display_name():
    lang = resolve_language("tlh")
    assert lang.code == "tlh"
    assert lang.name == "tlh"


def test_describe_languages_lists_every_code():
    text = describe_languages()
    assert len(LANGUAGE_NAMES) >= 35
    for code, name in LANGUAGE_NAMES.items():
        assert f"{code} ({name})" in text
