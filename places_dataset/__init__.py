"""
Places dataset toolkit.

Responsibilities:
- Decode flat or columnar "places" rows into typed records and back.
- Validate records against the dataset schema.
- Hold accepted records in an append-only, dimension-consistent store.
- Rank stored records by embedding similarity.
"""
