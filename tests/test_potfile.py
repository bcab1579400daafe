from kconftools.potfile import Message, MessageCatalog, escape


def test_escape_plain():
    assert escape("hello") == '"hello"'


def test_escape_quote_and_backslash():
    result = escape('a"b\\c')
    assert result.startswith('"') and result.endswith('"')
    assert '\\"' in result
    assert "\\\\" in result
    assert len(result) == len('a"b\\c') + 2 + 2


def test_escape_multiline_trailing_newline():
    assert escape("a\n") == '""\n"a\\n"'


def test_escape_multiline_inner_newline():
    result = escape("a\nb")
    assert result.startswith('""\n"')
    assert result.endswith('b"')
    assert result.count("\\n") == 1


def test_find_unknown_is_none():
    catalog = MessageCatalog()
    assert catalog.find("missing") is None


def test_add_creates_message():
    catalog = MessageCatalog()
    message = catalog.add("Prompt", None, "Kconfig", 3)
    assert catalog.find("Prompt") is message
    assert message.msg == escape("Prompt")
    assert message.files == [("Kconfig", 3)]


def test_add_again_prepends_location_and_keeps_option():
    catalog = MessageCatalog()
    catalog.add("Prompt", "FOO", "a", 1)
    message = catalog.add("Prompt", "BAR", "b", 2)
    assert message.files == [("b", 2), ("a", 1)]
    assert message.option == "FOO"
    assert "#: b:2, a:1\n" in catalog.render()


def test_render_single_entry():
    catalog = MessageCatalog()
    catalog.add("Prompt", None, "Kconfig", 3)
    assert catalog.render() == '\n#: Kconfig:3\nmsgid "Prompt"\nmsgstr ""\n'


def test_render_option_comment():
    catalog = MessageCatalog()
    catalog.add("help text", "FOO", "K", 5)
    assert "# FOO:00000\n" in catalog.render()


def test_render_skips_empty_messages():
    catalog = MessageCatalog()
    catalog.add("", None, "K", 1)
    assert catalog.render() == ""
    assert isinstance(catalog.find(""), Message)


def test_render_newest_first():
    catalog = MessageCatalog()
    catalog.add("first", None, "K", 1)
    catalog.add("second", None, "K", 2)
    text = catalog.render()
    assert text.index(escape("second")) < text.index(escape("first"))