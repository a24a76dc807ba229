"""
trycore Basic Usage Example

This example demonstrates:
1. Defining failure kinds (with a parent kind)
2. Dispatching on the kind of failure
3. else / finally phases
4. Suspending (async) runs
"""

import asyncio

from trycore import FailureRegistry, attempt


registry = FailureRegistry()
StorageFailure, = registry.define("StorageFailure")
NotFound, Corrupted = registry.define("NotFound", "Corrupted", StorageFailure)

STORE = {"a": "1", "b": "oops"}


def load(key):
    if key not in STORE:
        raise NotFound(key)
    if not STORE[key].isdigit():
        raise Corrupted(f"{key}={STORE[key]!r}")
    return int(STORE[key])


async def load_later(key):
    await asyncio.sleep(0.01)
    return load(key)


def main():
    print("=" * 60)
    print("trycore Basic Example")
    print("=" * 60)

    # ===== Example 1: Catch by kind =====
    print("\n📌 Example 1: Catch by kind")
    print("-" * 60)

    reader = (
        attempt(load, registry=registry)
        .catch(NotFound, lambda failure: f"missing: {failure.message}")
        .catch("Corrupted", lambda failure: f"bad data: {failure.message}")
    )
    for key in ("a", "b", "c"):
        print(f"{key} -> {reader.run(key)}")

    # ===== Example 2: else / finally =====
    print("\n📌 Example 2: else and finally")
    print("-" * 60)

    result = (
        attempt(lambda: load("a"), registry=registry)
        .catch(NotFound, lambda failure: None)
        .else_(lambda: "loaded without failure")
        .finally_(lambda: print("finally ran"))
    )
    print(f"Result: {result}")

    # ===== Example 3: Exact-kind matching =====
    print("\n📌 Example 3: A parent clause does not catch children")
    print("-" * 60)

    strict = attempt(load, registry=registry).catch(StorageFailure, lambda failure: "storage")
    try:
        strict.run("c")
    except Exception as e:
        print(f"Propagated: {e}")
        print(f"Is a StorageFailure: {e.kind.is_subkind_of(StorageFailure)}")

    # ===== Example 4: Async =====
    print("\n📌 Example 4: Suspending run")
    print("-" * 60)

    async_reader = attempt(load_later, registry=registry).catch(NotFound, lambda failure: 0)
    print(f"Async result: {asyncio.run(async_reader.run_async('missing'))}")


if __name__ == "__main__":
    main()
