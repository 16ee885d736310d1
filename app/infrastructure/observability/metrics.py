from prometheus_client import Counter, Histogram

GEOLOCATION_LOOKUPS_TOTAL = Counter(
    'geolocation_lookups_total',
    'Total number of IP geolocation lookups by provider and outcome',
    ['provider', 'outcome'],
)

GEOLOCATION_LOOKUP_DURATION = Histogram(
    'geolocation_lookup_duration_seconds',
    'Duration of IP geolocation lookups, short-circuited ones included',
    ['provider'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

USER_SIGN_UPS_TOTAL = Counter(
    'user_sign_ups_total',
    'Total number of sign-up attempts by result',
    ['result'],
)
