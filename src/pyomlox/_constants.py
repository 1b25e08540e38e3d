"""Internal constants shared across the library."""

USER_AGENT = "pyomlox"

#: Reference poll period of the intrusion monitor, in seconds.
DEFAULT_POLL_INTERVAL: float = 5.0

#: Fallback lifetime for tokens whose response omits ``expires_in``.
DEFAULT_TOKEN_LIFETIME: float = 300.0

# ------------------------------------------------------------------
# Endpoint paths (relative to ``OmloxConfig.base_url``)
# ------------------------------------------------------------------

TRACKABLES_SUMMARY = "/trackables/summary"
TRACKABLES = "/trackables"
FENCES_SUMMARY = "/fences/summary"
FENCES = "/fences"
ZONES_SUMMARY = "/zones/summary"
ZONES = "/zones"
PROVIDERS_SUMMARY = "/providers/summary"
PROVIDERS = "/providers"
COLLISIONS = "/collisions"
COLLISION_EVENTS = "/collision-events"
