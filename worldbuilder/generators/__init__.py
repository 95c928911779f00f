"""Feature generators, one per tag category.

Every generator takes ``(editor, element, ground, config)`` and writes the
element's geometry into the editor.  ``GENERATORS`` maps the names used by
the dispatch routes to the callables.
"""

from . import (
    amenities, barriers, bridges, buildings, doors, highways, landuse,
    leisure, natural, railways, tourisms, water_areas, waterways,
)

GENERATORS = {
    'buildings': buildings.generate_buildings,
    'building_relations': buildings.generate_building_from_relation,
    'highways': highways.generate_highways,
    'landuse': landuse.generate_landuse,
    'natural': natural.generate_natural,
    'amenities': amenities.generate_amenities,
    'leisure': leisure.generate_leisure,
    'leisure_relations': leisure.generate_leisure_from_relation,
    'barriers': barriers.generate_barriers,
    'waterways': waterways.generate_waterways,
    'bridges': bridges.generate_bridges,
    'railways': railways.generate_railways,
    'aeroways': highways.generate_aeroway,
    'sidings': highways.generate_siding,
    'doors': doors.generate_doors,
    'tourisms': tourisms.generate_tourisms,
    'water_areas': water_areas.generate_water_areas,
}
