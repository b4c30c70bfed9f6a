"""Minimal example tracking changes between two configuration snapshots."""

from kv_flat import diff_nested, filter_flatten, flatten, unflatten


def main() -> None:
    """Flatten two settings objects, report what changed and rebuild the new one."""
    before = {"server": {"port": 80, "hosts": ["a", "b"]}, "logging": {"level": "INFO"}}
    after = {"server": {"port": 8080, "hosts": ["a"]}, "logging": {"level": "DEBUG", "json": True}}

    snapshot = flatten(before)
    print(f"{snapshot=}")
    print("server keys:", filter_flatten(snapshot, "server"))

    delta = diff_nested(before, after)
    print("added:", delta.added)
    print("removed:", delta.removed)
    print("changed:", delta.changed)

    rebuilt = unflatten(delta.apply(snapshot))
    print("rebuilt:", rebuilt)
    print("matches:", rebuilt == after)


if __name__ == "__main__":
    main()
