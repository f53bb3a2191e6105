from aiask.search import should_use_web_search


def test_time_sensitive_command_uses_search() -> None:
    assert should_use_web_search("what's the weather today", False, False)


def test_coding_task_skips_search() -> None:
    assert not should_use_web_search("help me write a function", False, False)


def test_force_flag_wins() -> None:
    assert should_use_web_search("help me write a function", True, False)
    assert should_use_web_search("help me write a function", True, True)


def test_suppress_flag() -> None:
    assert not should_use_web_search("latest news about the stock market", False, True)


def test_coding_task_with_time_marker_uses_search() -> None:
    assert should_use_web_search("fix my code for the latest python release", False, False)


def test_informational_query_about_entity() -> None:
    assert should_use_web_search("Who is the person behind that product", False, False)


def test_informational_query_without_entity() -> None:
    assert not should_use_web_search("define entropy", False, False)


def test_case_insensitive() -> None:
    assert should_use_web_search("BREAKING: stocks", False, False)


def test_default_is_no_search() -> None:
    assert not should_use_web_search("the meaning of entropy in physics", False, False)
    assert not should_use_web_search("", False, False)
