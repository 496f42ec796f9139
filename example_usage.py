"""
Example usage of datamod in acceptance-test step definitions.

This file demonstrates how to declare entities, create fixtures, chain
entities through sub-selects and keep the active record across loops.
"""

from sqlalchemy import text

from datamod import DataMod, SqlAlchemyApi

# ============================================================================
# Example 1: Declaring entities
# ============================================================================


class Status(DataMod):
    """Lookup table of user statuses, seeded on construction."""

    seed_unique_field = "name"

    @classmethod
    def get_base_table(cls) -> str:
        return "status"

    @classmethod
    def get_data_mapping(cls) -> dict[str, str]:
        return {"id": "id", "name": "status_name"}

    @classmethod
    def get_seed_data(cls) -> list[dict]:
        return [{"name": "enabled"}, {"name": "disabled"}]


class User(DataMod):
    @classmethod
    def get_base_table(cls) -> str:
        return "user"

    @classmethod
    def get_data_mapping(cls) -> dict[str, str]:
        return {
            "id": "id",
            "name": "full_name",
            "email": "email_address",
            "status": "status_id",
        }

    # ------------------------------------------------------------------------
    # Example 2: Entity-specific helper built on sub_select + update
    # ------------------------------------------------------------------------

    def update_status_by_id(self, user_id: int, status_name: str) -> int:
        """Point a user at the status with the given name."""
        return self.update(
            {"status": self.sub_select("Status", "id", {"name": status_name})},
            {"id": user_id},
        )


# ============================================================================
# Example 3: A scenario
# ============================================================================


def main() -> None:
    api = SqlAlchemyApi("sqlite:///:memory:")
    with api.engine.begin() as conn:
        conn.execute(
            text("CREATE TABLE status (id INTEGER PRIMARY KEY, status_name TEXT NOT NULL)")
        )
        conn.execute(
            text(
                'CREATE TABLE "user" ('
                "id INTEGER PRIMARY KEY, full_name TEXT NOT NULL, "
                "email_address TEXT, status_id INTEGER)"
            )
        )

    Status(api)
    user = User(api)

    # Given a user "abdul" exists
    user.create_fixture({"name": "abdul", "email": "its@abdul.com"}, unique_column="email")
    user.update_status_by_id(user.get_value("id"), "enabled")
    print("abdul:", user.get_value("id"), "status", user.get_value("status"))

    # And three more users exist, without losing track of abdul
    user.save_session("id")
    for i in range(3):
        user.create_fixture({"name": f"user {i}"})
    user.restore_session()
    print("still abdul:", user.get_value("name"))

    # Clean up everything the scenario inserted
    api.purge_history()
    api.dispose()


if __name__ == "__main__":
    main()
