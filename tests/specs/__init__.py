"""
Scenario tables executed by the test modules.
"""

from ._schema import (
    EmploymentScenario,
    ExpectedJdgFigures,
    ExpectedSpzooFigures,
    JdgScenario,
    SpzooScenario,
    D,
)
