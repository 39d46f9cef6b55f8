import pytest

from splicetext.buffer import ByteStore
from splicetext.errors import RangeOutOfBoundsError


def make_store(text: str = "hello world") -> ByteStore:
    return ByteStore(text.encode("utf-8"))


def test_same_length_replacement() -> None:
    store = make_store()

    assert store.replace_range(0, 5, b"howdy") == 0
    assert bytes(store) == b"howdy world"


def test_shrinking_replacement() -> None:
    store = make_store()

    assert store.replace_range(5, 11, b"") == -6
    assert bytes(store) == b"hello"


def test_growing_replacement() -> None:
    store = make_store("hello")

    assert store.replace_range(5, 5, b", partner") == 9
    assert bytes(store) == b"hello, partner"
    assert len(store) == 14


def test_replacement_preserves_surrounding_bytes() -> None:
    store = make_store("α-β-γ")

    store.replace_range(2, 3, "→".encode("utf-8"))

    assert bytes(store).decode("utf-8") == "α→β-γ"


@pytest.mark.parametrize(("start", "end"), [(3, 2), (0, 12), (-1, 0)])
def test_invalid_ranges_leave_store_untouched(start: int, end: int) -> None:
    store = make_store()

    with pytest.raises(RangeOutOfBoundsError) as info:
        store.replace_range(start, end, b"x")

    assert info.value.length == 11
    assert bytes(store) == b"hello world"


def test_reset_and_slice() -> None:
    store = make_store()

    assert store.slice(6, 11) == b"world"
    assert store.reset(b"bye") == -8
    assert bytes(store) == b"bye"
