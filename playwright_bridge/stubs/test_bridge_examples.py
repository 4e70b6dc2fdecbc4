from playwright_bridge.client import (
    create,
    current_user,
    login,
    logout,
    refresh_database,
    run_python,
)


def test_can_create_a_new_user_and_log_them_in(bridge_page, run):
    user1 = run(login(bridge_page))
    assert user1["name"]

    user2 = run(login(bridge_page, {"email": "jane@example.com"}))
    assert user2["email"] == "jane@example.com"

    user3 = run(login(bridge_page, {"email": "new@user.com", "name": "New user"}))
    assert user3["name"] == "New user"


def test_can_logout_the_current_user(bridge_page, run):
    run(login(bridge_page))
    assert run(current_user(bridge_page))["name"]

    run(logout(bridge_page))
    assert run(current_user(bridge_page)) is None


def test_can_execute_arbitrary_python(bridge_page, run):
    run(refresh_database(bridge_page, {"--seed": True}))

    assert run(run_python(bridge_page, "2 + 2")) == 4
    assert run(run_python(bridge_page, "await User.count()")) == 1

    run(create(bridge_page, "User", count=2))
    assert run(run_python(bridge_page, "await User.count()")) == 3
