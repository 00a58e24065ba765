"""Live RMLMapper integration tests.

These tests run a real rmlmapper.jar with a real JVM. They are marked with
@pytest.mark.live_rmlmapper and skipped unless RMLMAPPER_JAR is set.

To run these tests:
    1. Download rmlmapper-<version>-all.jar from the RMLMapper releases page
    2. Run: RMLMAPPER_JAR=/path/to/rmlmapper.jar pytest tests/live_rmlmapper -v -m live_rmlmapper
"""
