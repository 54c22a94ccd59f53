"""
Route planner: itinerary composition over a flight + ground transfer network.

Finds every itinerary with exactly one flight, optionally preceded and/or
followed by a ground transfer, and memoizes results in a cache-aside layer
with region-wide invalidation on writes.
"""
