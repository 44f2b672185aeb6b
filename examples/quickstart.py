"""Quickstart: walks an organization through its staff and game lifecycle.

After `pip install -e .`; uses in-memory stores unless DATABASE_URL is set:
    python examples/quickstart.py
"""

from hvz_orgs.control_plane.services import create_services
from hvz_orgs.shared.exceptions import ConflictError, InvalidOperationError, UnauthorizedError
from hvz_orgs.shared.logging import configure_logging

configure_logging("WARNING")


def main() -> None:
    svc = create_services()

    # 1. Users come from the identity subsystem; register a few locally
    for user_id, name in (("u-alice", "Alice"), ("u-bob", "Bob"), ("u-carol", "Carol")):
        svc.users.register(user_id, name=name)
    print("[1] Registered users: u-alice, u-bob, u-carol")

    # 2. Create an organization; the creator becomes owner and sole admin
    org = svc.orgs.create_org("Campus HvZ", "campus-hvz", "u-alice")
    print(f"[2] Created org {org.org_id}: owner={org.owner_id}, admins={sorted(org.administrators)}")

    # 3. Staff it
    svc.orgs.add_admin(org.org_id, "u-bob")
    org = svc.orgs.add_moderator(org.org_id, "u-carol")
    print(f"[3] Admins={sorted(org.administrators)}, moderators={sorted(org.moderators)}")

    # 4. A moderator cannot start a game
    try:
        svc.orgs.create_game("Spring Week", "u-carol", org.org_id)
    except UnauthorizedError as e:
        print(f"[4] Rejected: {e}")

    # 5. An admin can, once
    game = svc.orgs.create_game("Spring Week", "u-bob", org.org_id)
    print(f"[5] Started game {game.game_id} ({game.name})")
    try:
        svc.orgs.create_game("Fall Week", "u-bob", org.org_id)
    except ConflictError as e:
        print(f"    Second game rejected: {e}")

    # 6. Ownership moves between admins; the owner cannot be demoted
    org = svc.orgs.set_owner(org.org_id, "u-bob")
    try:
        svc.orgs.remove_admin(org.org_id, "u-bob")
    except InvalidOperationError as e:
        print(f"[6] Owner is now {org.owner_id}; removal rejected: {e}")

    # 7. End the game so the next one can start
    svc.orgs.clear_active_game(org.org_id)
    svc.orgs.create_game("Fall Week", "u-alice", org.org_id)
    org = svc.orgs.get_by_url("campus-hvz")
    print(f"[7] Games={list(org.games)}, active={org.active_game_id}")


if __name__ == "__main__":
    main()
