# main.py
from mapnav.app.build import build
from mapnav.synth.networks import grid_network
from mapnav.synth.rng import RNGRegistry


def run(seed: int = 7):
    rng = RNGRegistry(seed, scenario="demo")
    graph = grid_network(12, 12, rng=rng.stream("grid"), drop_p=0.3)
    backend = build({"run_id": "demo"}, graph=graph)

    path, steps = backend.route_with_directions(-122.289, 37.884, -122.268, 37.863)
    for s in steps:
        print(s)

    # whole-map viewport first, then a neighbourhood
    print(backend.raster({"ullon": -122.2998, "ullat": 37.8922, "lrlon": -122.2119, "lrlat": 37.8228, "w": 512}))
    print(backend.raster({"ullon": -122.27, "ullat": 37.87, "lrlon": -122.26, "lrlat": 37.86, "w": 800}))
    return path


if __name__ == "__main__":
    run()
