from version_state.app import ordered_pages


def test_ordered_pages_known_first_then_alphabetical():
    labels = ["Setup / Connection", "Zeta", "Issue Version State", "Alpha", "Field Configuration"]
    assert ordered_pages(labels) == [
        "Issue Version State",
        "Field Configuration",
        "Setup / Connection",
        "Alpha",
        "Zeta",
    ]


def test_ordered_pages_skips_missing():
    assert ordered_pages(["Setup / Connection"]) == ["Setup / Connection"]
    assert ordered_pages([]) == []
