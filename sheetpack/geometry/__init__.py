from .polygon import (
    point_in_polygon,
    distance_to_segment,
    distance_to_boundary,
    polygon_area,
    polygon_centroid,
    polygon_bounds,
)
from .trapezoid import (
    TrapezoidSpec,
    Trapezoid,
    GeometryError,
    InvalidDimensions,
    validate_trapezoid,
    compute_trapezoid,
)
