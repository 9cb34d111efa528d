import pytest

from recipe_form.core.models import FormState
from recipe_form.services.sessions import FormSessionStore


def test_unknown_session_reads_default_without_storing():
    store = FormSessionStore()
    assert store.get("nobody") == FormState()
    assert len(store) == 0


def test_least_recently_used_session_is_evicted():
    store = FormSessionStore(max_sessions=2)
    store.save("a", FormState(description="a"))
    store.save("b", FormState(description="b"))
    store.get("a")  # touch: b is now oldest
    store.save("c", FormState(description="c"))
    assert len(store) == 2
    assert store.get("a").description == "a"
    assert store.get("c").description == "c"
    assert store.get("b") == FormState()


def test_max_sessions_must_be_positive():
    with pytest.raises(ValueError):
        FormSessionStore(max_sessions=0)
