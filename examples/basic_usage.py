"""Basic usage examples for margee-lib."""

from margee_lib import (
    SphericalPoint,
    apply_rotation,
    apply_translation,
    bearing,
    distance,
    parse_batch,
    simplify,
    solve_from_shapes,
)
from margee_lib.transform.runner import apply

cambridge = (52.205, 0.119)
paris = (48.857, 2.351)

# Point measures
print(f"Distance: {distance(cambridge, paris):.1f} km")
print(f"Bearing:  {bearing(cambridge, paris):.1f}°")
print(f"Cambridge: {SphericalPoint(*cambridge)}")

# Rotate a triangle 15° about an Euler pole, in 3 frames
triangle = [(10.0, 20.0), (12.0, 24.0), (8.0, 27.0), (6.0, 22.0)]
for i, frame in enumerate(apply_rotation(triangle, (30.0, 40.0), 15.0, steps=3)):
    print(f"Frame {i}: {[(round(lat, 3), round(lon, 3)) for lat, lon in frame]}")

# Translate it 500 km north-east and recover the equivalent Euler rotation
moved = apply_translation(triangle, 45.0, 500.0)
first, second = solve_from_shapes(triangle, moved)
print(f"\nEuler pole {first.pole} by {first.angle:.3f}°")
print(f"Antipodal  {second.pole} by {second.angle:.3f}°")

# Simplify a wiggly coastline with a 5 km kink
coast = [(0.01 * (i % 3), i * 0.05) for i in range(100)]
print(f"\nSimplified {len(coast)} points to {len(simplify(coast, 5000.0))}")

# Batch commands apply in sequence
coords = triangle
for command in parse_batch("r 30 40 10\nt 90 200 2\n"):
    result = apply(command.to_request(coords))
    coords = result[-1] if command.steps > 1 else result
print(f"\nAfter batch: {coords[0]}")
