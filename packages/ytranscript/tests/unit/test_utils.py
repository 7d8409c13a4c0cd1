from ytranscript.utils import note_filename, stats


def test_note_filename_replaces_bad_chars():
    assert note_filename('A/B<C>D|E?F:"G"*\\H') == "A_B_C_D_E_F__G___H.md"


def test_note_filename_extension_and_empty_title():
    assert note_filename("Demo", "srt") == "Demo.srt"
    assert note_filename("   ") == "untitled.md"
    assert note_filename("Demo", "") == "Demo"


def test_stats_helper():
    txt = "one two\nthree"
    assert stats(txt) == (3, 1, len(txt))


def test_stats_no_final_newline():
    assert stats("hello world") == (2, 0, 11)
