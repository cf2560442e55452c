class MainConfig:
    """
    Library-wide constants for spherical geometry and shape transforms.

    Attributes:
        earth_radius_km: Mean earth radius used when a point has no explicit radius
        min_radius_km: Lower clamp for a point's radius in kilometres
        max_radius_km: Upper clamp for a point's radius in kilometres
        wgs84_semi_major_m: Equatorial radius used to turn a kink in meters into degrees
        max_steps: Largest number of interpolation steps a transform may request
        default_kink_m: Simplification threshold used when none is given
        euler_indices: Vertex indices used to pair up two versions of a shape
        epsilon: Tolerance under which a cross product is treated as zero

    Notes:
        - Distances along the sphere are in kilometres, the kink is in meters
        - Angles at the public boundary are in decimal degrees
    """

    # Sphere
    earth_radius_km: float = 6371.0
    min_radius_km: float = 6353.0
    max_radius_km: float = 6384.0

    # Simplification
    wgs84_semi_major_m: float = 6378137.0
    default_kink_m: float = 1000.0

    # Transforms
    max_steps: int = 50
    euler_indices: tuple[int, int] = (0, 3)

    # Numerics
    epsilon: float = 1e-12
