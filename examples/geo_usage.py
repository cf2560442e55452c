"""Geospatial functionality examples for margee-lib."""

# Note: GeoDataFrame support requires GeoPandas
# Install with: pip install margee-lib[geo]

from shapely.geometry import Polygon

from margee_lib.geo import rotate_geometry, translate_geometry

block = Polygon([(20.0, 10.0), (24.0, 10.0), (24.0, 14.0), (20.0, 14.0)])

print("Rotated 20° about (30, 40):")
print(rotate_geometry(block, (30.0, 40.0), 20.0))

print("\nSame block in web mercator, moved 300 km east:")
projected = Polygon([(0.0, 0.0), (100000.0, 0.0), (100000.0, 100000.0)])
print(translate_geometry(projected, 90.0, 300.0, crs="EPSG:3857"))

try:
    import geopandas as gpd

    from margee_lib.geo import transform_geodataframe
    from margee_lib.transform.config import TransformRequest

    gdf = gpd.GeoDataFrame({"name": ["block"], "geometry": [block]}, crs="EPSG:4326")
    frames = transform_geodataframe(gdf, TransformRequest.rotation((), (30.0, 40.0), 20.0, 4))

    print(f"\n{len(frames)} GeoDataFrame frames:")
    for frame in frames:
        print(frame.geometry.iloc[0].exterior.coords[0])

except ImportError as e:
    print(f"\nError: {e}")
    print("\nTo use GeoDataFrame features, install with:")
    print("  pip install margee-lib[geo]")
