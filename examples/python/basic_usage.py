#!/usr/bin/env python3
"""
Basic sqlitedis usage example.

This example demonstrates:
- Opening a store backed by a SQLite file
- String commands and counters
- Set commands and set algebra
- Bit commands
- Key enumeration
"""

import tempfile
from pathlib import Path

import sqlitedis


def main():
    path = Path(tempfile.mkdtemp()) / "example.db"

    with sqlitedis.connect(path, decode_responses=True) as r:
        print("Strings...")
        r.set("greeting", "Hello")
        r.append("greeting", ", world")
        print(f"  greeting = {r.get('greeting')!r} ({r.strlen('greeting')} bytes)")

        for _ in range(3):
            r.incr("visits")
        print(f"  visits = {r.get('visits')}")

        print("\nSets...")
        for name in ("Steve", "Paul", "Micheal"):
            r.sadd("english", name)
        for name in ("Kirsi", "My", "Jari", "Steve"):
            r.sadd("finnish", name)
        print(f"  union = {sorted(r.sunion('english', 'finnish'))}")
        print(f"  intersection = {sorted(r.sinter('english', 'finnish'))}")

        print("\nBits...")
        r.set("flags", "foobar")
        print(f"  bitcount(flags) = {r.bitcount('flags')}")
        r.setbit("flags", 0, 1)
        print(f"  getbit(flags, 0) = {r.getbit('flags', 0)}")

        print("\nKeys...")
        print(f"  all keys = {r.keys()}")
        print(f"  keys matching '^f' = {r.keys('^f')}")

        # Unported commands are soft no-ops
        print(f"\nexpire -> {r.expire('greeting', 60)}")

    print(f"\nData stored in {path}")


if __name__ == "__main__":
    main()
