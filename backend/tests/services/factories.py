"""Test data builders shared by store, service, and route tests."""


def employee_fields(**overrides) -> dict:
    """A valid create payload; override any field per test."""
    fields = {
        "name": "Ana Silva",
        "email": "ana@example.com",
        "mobile": "5511987654321",
        "designation": "Manager",
        "course": "MBA",
        "gender": "Female",
    }
    fields.update(overrides)
    return fields


async def seed_employees(store, names: list[str], **overrides) -> list:
    """Insert one employee per name with unique emails. Returns the records in order."""
    records = []
    for i, name in enumerate(names):
        records.append(await store.insert(
            employee_fields(name=name, email=f"user{i}@example.com", **overrides),
        ))
    return records
