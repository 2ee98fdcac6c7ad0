# coldet

Collision detection and response for moving spheres against other spheres,
fixed spheres, infinite planes and limited (rectangular) plates. The package
also includes a Galton board solver. Spheres are released in batches and fall
through fixed spheres and plates. When a sphere reaches the floor it comes to
rest there, and its landing spot is counted.

Vectors are NumPy arrays of three floats. Time points and durations are whole
nanoseconds, held as plain integers.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `coldet.types`
  - `vector3` and `normalize` build vectors. `normalize` returns a zero vector unchanged.
  - `seconds`, `milliseconds`, `microseconds` and `nanoseconds` give a duration in nanoseconds. Fractional values are truncated.
  - `to_dt` converts nanoseconds to float seconds.
  - `time_diff` gives the time between two time points.
- `coldet.bodies`
  - The rigid bodies: `Sphere`, `FixedSphere`, `FixedPlane` and `FixedLimitedPlane`.
  - The motion `State` of a sphere: `FREE`, `RESTING`, `SLIDING` or `ROLLING`.
  - `Frame`, which places each body in space. It has `translate_parent`, `rotate_local`, `rotate_parent` and a homogeneous `matrix`.
- `coldet.trajectory`
  - `compute_linear_trajectory` and `compute_rolling_linear_trajectory` return the displacement and the velocity change over a timestep.
  - `parallel_ds` and `parallel_acceleration` project a vector into a plane.
- `coldet.detection`
  - Finds the time of impact as a fraction `x` of the remaining step, with `0 < x <= 1`, or returns `None`.
  - Covers a sphere against a fixed plane, a limited plate, another sphere or a fixed sphere.
  - There are two forms: one takes explicit positions and velocities, the other takes bodies and a mapping of cached trajectories.
- `coldet.response`
  - Velocities after an impact: reflection in a plane and an elastic sphere–sphere impact.
  - `parallel_velocity`, which removes the component along a normal.
  - Responses against limited plates and fixed spheres, which include a friction loss.
- `coldet.collisions`
  - The collision record classes.
  - `CollisionQueues`, which holds pending collisions. It keeps one queue per kind, sorted latest first, with only the earliest collision kept per sphere or per pair of spheres.
  - `detect_initial_collisions` and `detect_new_collisions`.
- `coldet.galton`
  - `GaltonScenario`, `solve`, `simulate`, `rotation_axis` and `set_rotation_speed`.
- `coldet.testing_solvers`
  - `passive_solver` changes nothing.
  - `rotate_specific_objects` spins the first twelve spheres and fixed planes at half a turn per second. It raises `ValueError` if there are fewer than twelve of either.
- `coldet.scenarios`
  - `ScenarioList`, a name-ordered live view of a mapping of scenarios.
  - Helpers that count the objects in a fixture and take snapshots of them: `number_of_spheres`, `sphere_data`, `fixed_plane_data` and the like.
- `coldet.geometry`
  - `slab_faces` and `LimitedPlaneGeometry` describe a limited plate as a thin slab with six parallelogram faces.
  - `LimitedPlaneGeometry.bounds` gives the slab's axis-aligned bounds.

## Example

Find when a sphere moving along x hits a wall:

```python
from coldet.types import vector3, seconds
from coldet.detection import detect_collision_sphere_fixed_plane

t0 = 0
hit = detect_collision_sphere_fixed_plane(
    t0,
    vector3(0.0, 10.0, 0.0), 1.0, vector3(10.0, 0.0, 0.0),
    vector3(10.0, 0.0, 0.0), vector3(-1.0, 0.0, 0.0),
    vector3(0.0, 0.0, 0.0),
    t0, seconds(1),
)
print(hit)  # 0.9
```

`hit` is `None` if the sphere does not reach the plane within the timestep.

## Galton board

Build a `GaltonScenario` from these parts:

- spheres
- fixed spheres
- floor planes
- plates
- gravity
- `pyramid_top`

Then call `solve(scenario, timestep, now)` once per step, with `timestep` and `now` in nanoseconds.

- Every 7 seconds of simulated time, `solve` makes another 5 spheres active.
- When a sphere reaches a floor plane, it comes to rest. `solve` then prints its x and z coordinates to standard output as `x|z`.
- The landing is counted in `x_distribution` and `z_distribution`. Each has 50 bins covering -25 to 25.
- `solve` returns `True` once every sphere has landed.

## What this package does not do

- **No display.** There is no window, scene or rendering. `coldet.geometry` only computes face parallelograms and bounds; it builds no vertex data.
- **No built-in scenarios and no command-line program.** You build scenarios yourself in Python.
- **No sliding or rolling in the Galton solver.** Its spheres are only ever free or resting. A sphere that is not free does not respond to a sphere–sphere impact.