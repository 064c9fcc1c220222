from accounts.models import NewUser, User, UserUpdate, format_permitted_pages, parse_permitted_pages


def test_parse_permitted_pages():
    assert parse_permitted_pages("1,2, 5") == {1, 2, 5}
    assert parse_permitted_pages("") == set()
    assert parse_permitted_pages(None) == set()
    assert parse_permitted_pages("3,,x,3") == {3}


def test_format_permitted_pages():
    assert format_permitted_pages("2,1,2") == "1,2"
    assert format_permitted_pages({11, 1}) == "1,11"
    assert format_permitted_pages([]) == ""
    assert format_permitted_pages(None) == ""


def test_new_user_canonicalises_pages():
    assert NewUser(email="a@x.com", permitted_pages=[3, 1]).permitted_pages == "1,3"
    assert NewUser(email="a@x.com", permitted_pages="1, 2").permitted_pages == "1,2"


def test_user_from_row():
    u = User(user_id=1, email="a@x.com", activated=1, permitted_pages_id=None)
    assert u.activated is True
    assert u.permitted_pages_id == ""
    assert u.permitted_pages == set()


def test_parse_ignores_non_ascii_and_non_space_whitespace():
    # superscript and full-width digits, tabs and leading zeros never match in SQL either
    assert parse_permitted_pages("1,²") == {1}
    assert parse_permitted_pages("３,4") == {4}
    assert parse_permitted_pages("1,\t2") == {1}
    assert parse_permitted_pages("1,02") == {1}
    assert parse_permitted_pages("1,2\n") == {1}
    assert NewUser(email="a@x.com", permitted_pages="1,²").permitted_pages == "1"
    assert User(user_id=1, email="a@x.com", permitted_pages_id="²,5").permitted_pages == {5}


def test_user_update_none_means_unchanged():
    upd = UserUpdate(user_id=1)
    assert (upd.email, upd.name, upd.lastname, upd.permitted_pages) == (None, None, None, None)
    assert UserUpdate(user_id=1, permitted_pages=[]).permitted_pages == ""
    assert UserUpdate(user_id=1, permitted_pages={2, 1}).permitted_pages == "1,2"
