"""Example: grow a small random patch and audit it."""

from penrose_tiler import EngineConfig, PenroseTiler, PrototileType, check_tiling, print_history


def main() -> None:
    tiler = PenroseTiler(EngineConfig(random_seed=7))
    tiler.place_root(PrototileType.FAT)
    placed = tiler.grow(40)
    print("Placed:", placed)
    print("Frontier:", len(tiler.frontier()))
    print("Warnings:", [str(w) for w in check_tiling(tiler)])
    print(print_history(tiler.export_history()))


if __name__ == "__main__":
    main()
