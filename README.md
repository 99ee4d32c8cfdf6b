# solarsim

A small gravitational N-body simulator. A heavy central body (the sun, object 0)
sits at the origin with no velocity, and the other objects, all of Earth's mass,
are scattered at random through a 100 AU cube with random velocities of up to
2978.5 m/s per component. Each time step is one hour of simulated time. Every
object feels the pull of every other object, and its velocity and position are
then advanced with a simple explicit step.

Each time step can be computed in several ways:

- serially, on the calling thread;
- split into contiguous index ranges that each run on a freshly started thread;
- split into index ranges that are submitted to an executor;
- with long-lived worker threads that meet at barriers after every step.

## Installing

```
pip install .
```

The package needs numpy. To run the tests, install the `test` extra:

```
pip install ".[test]"
pytest
```

## Running the simulator

```
solarsim
```

By default the command builds 1000 objects (the sun included) from seed 0,
prints their starting positions in AU, simulates one year (8766 one-hour steps)
serially, and prints the final positions followed by the elapsed wall-clock
time in milliseconds. Progress goes to standard error: a `STEP n` line every
100 steps, and a `Years simulated = n` message every 10 years.

Each position line has the form

```
   0: x =   0.000E+00, y =   0.000E+00, z =   0.000E+00
```

Options:

- `--mode {serial,threads,pool,barriers}` — how each step is spread over
  threads (default `serial`). In `barriers` mode the number of workers is
  printed first as `N processing elements detected!`.
- `--workers N` — number of threads (default: the number of CPUs).
- `--objects N` — number of bodies, sun included (default 1000).
- `--years N` — years to simulate (default 1).
- `--steps-per-year N` — time steps per year (default 8766).
- `--seed N` — seed for the random starting state (default 0).

Invalid values (for example `--objects 0` or `--workers 0`) are reported as a
usage error.

The full interaction is computed between every pair of objects, so the work per
step grows with the square of the object count; a full default run takes a
while. Fewer objects or fewer steps per year make for a quick run:

```
solarsim --objects 50 --steps-per-year 200
```

## Using it as a library

```python
import sys

from solarsim.bodies import initialize_system
from solarsim.simulation import Simulation
from solarsim.timer import Timer

state = initialize_system(100, 0)
sim = Simulation(state)

with Timer() as stopwatch:
    for _ in range(24):
        sim.time_step()

sim.dump_dynamics(sys.stdout)
print(f"{stopwatch.time()} ms")
```

The main pieces:

- `solarsim.vector3.Vector3` — an immutable 3-vector supporting `+`, `-`,
  scaling by `*` and `/`, and `magnitude_squared()`.
- `solarsim.bodies` — the constants (`AU`, `G`, `TIME_STEP`, `OBJECT_COUNT`,
  masses), the `ObjectDynamics` and `SystemState` dataclasses, and
  `initialize_system(object_count, seed)`, which builds the starting state.
  Random positions and velocities come from `CRandom`, a seeded generator
  reproducing a common C library `rand`, so the same seed always gives the same
  system.
- `solarsim.simulation.Simulation` — holds the state and offers
  `compute_range`, `swap`, `time_step`, `time_step_threaded(workers)`,
  `time_step_pool(executor, workers)` and
  `run_with_barriers(steps, workers, on_step)`, plus `positions_au`,
  `format_dynamics` and `dump_dynamics(stream)` for output.
  `partition(object_count, parts)` splits the objects into contiguous index
  ranges, with the last range taking any remainder.
- `solarsim.timer.Timer` — a stopwatch that can be started and stopped many
  times, accumulating whole milliseconds; `reset()` clears it, `state` gives
  its `TimerState`, and it also works as a context manager. A custom clock
  function returning seconds may be passed in.
- `solarsim.cli.run(simulation, mode, workers, years, steps_per_year, out, err)`
  — drives a simulation for a number of years in a chosen `RunMode`, writing
  positions and progress to the given streams, and returns the steps taken.
  `solarsim.cli.main(argv)` is the command line entry point.

## What it does not do

All work runs in threads of a single Python process; the package does not
spread a simulation over several machines or processes, and does not use a GPU.
It has no input file for the starting state, saves nothing to disk, and draws
nothing: results are the text lines written to standard output.