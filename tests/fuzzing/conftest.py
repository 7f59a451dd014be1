"""Hypothesis settings for the property-based tests.

The first ``st.text()`` draw on a cold cache builds Hypothesis's unicode
charmap, which can exceed the input-generation health-check budget.
"""

from hypothesis import HealthCheck, settings

settings.register_profile("pulse", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("pulse")
