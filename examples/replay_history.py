"""Example: replay a placement log step by step and undo the last tile."""

from penrose_tiler import PenroseTiler, parse_history

TEXT = """
root fat
on 0 side 0 skinny
on 0 side 1 fat
on 0 side 2 fat
on 2 side 1 skinny
"""


def main() -> None:
    tiler = PenroseTiler()
    tiler.import_history(parse_history(TEXT))
    while True:
        step = tiler.replay_next()
        if step is None:
            break
        handle, transform, tile_type = step
        print(f"#{handle} {tile_type.label} at {transform}")

    removed = tiler.undo_last()
    print(f"Undid #{removed.handle}; side {removed.attach_side} of #{removed.parent} free again:",
          not tiler.get_side_used(removed.parent, removed.attach_side))


if __name__ == "__main__":
    main()
