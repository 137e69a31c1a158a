from domekit import embed

BANNER = b"// auto-generated file, do not modify\n"


def test_encode_small_example():
    assert embed.encode(b"a\n", "m") == BANNER + b"const char m[3] = {'a', '\\n',\n };\n"


def test_encode_escapes_quote_and_backslash():
    out = embed.encode(b"'\\", "m")
    assert b"'\\'', " in out
    assert b"'\\\\', " in out


def test_encode_declares_length_plus_one():
    source = "x = 1\ny = 2\n"
    out = embed.encode(source, "wren_module_test")
    assert out.startswith(BANNER)
    assert f"const char wren_module_test[{len(source) + 1}]".encode() in out
    assert out.endswith(b" };\n")


def test_encode_str_and_bytes_agree():
    assert embed.encode("hello", "n") == embed.encode(b"hello", "n")


def test_write_embedded(tmp_path):
    dest = tmp_path / "out.inc"
    embed.write_embedded(b"abc", "mod", dest)
    assert dest.read_bytes() == embed.encode(b"abc", "mod")


def test_run_default_destination_and_name(tmp_path):
    src = tmp_path / "main.wren"
    src.write_bytes(b"System.print(1)\n")
    logs = []
    assert embed.run(["embed", str(src)], logs.append) == 0
    out = tmp_path / "main.wren.inc"
    assert out.read_bytes() == embed.encode(b"System.print(1)\n", "wren_module_test")


def test_run_explicit_name_and_destination(tmp_path):
    src = tmp_path / "a.wren"
    src.write_bytes(b"x")
    dest = tmp_path / "b.inc"
    assert embed.run(["embed", str(src), "custom", str(dest)], [].append) == 0
    assert dest.read_bytes() == embed.encode(b"x", "custom")


def test_run_missing_file_name():
    logs = []
    assert embed.run(["embed"], logs.append) == 1
    assert "dome: Missing file name.\n" in logs


def test_run_unreadable_file(tmp_path):
    logs = []
    assert embed.run(["embed", str(tmp_path / "nope.wren")], logs.append) == 1
    assert logs[0].startswith("dome: Error reading file: ")


def test_run_help():
    logs = []
    assert embed.run(["embed", "--help"], logs.append) == 0
    assert embed.usage() in logs


def test_run_invalid_option():
    logs = []
    assert embed.run(["embed", "-z"], logs.append) == 1
    assert "invalid option" in logs[0]
    assert embed.usage() in logs


def test_main_not_enough_arguments(capsys):
    assert embed.main([]) == 1
    assert "Not enough arguments." in capsys.readouterr().out


def test_main_writes_file(tmp_path):
    src = tmp_path / "s.wren"
    src.write_bytes(b"q'\n")
    dest = tmp_path / "d.inc"
    assert embed.main([str(src), "name", str(dest)]) == 0
    assert dest.read_bytes() == embed.encode(b"q'\n", "name")


def test_main_missing_file(tmp_path, capsys):
    assert embed.main([str(tmp_path / "missing")]) == 1
    assert "Error reading file" in capsys.readouterr().err