import pytest

from PhysicalUnitsTool import settings as CFG


@pytest.fixture(autouse=True)
def restore_autorange_defaults():
    saved = CFG.get_autorange_defaults()
    yield
    CFG.set_autorange_defaults(
        policy=saved["policy"],
        strict_property=saved["strict_property"],
        round_magnitude=saved["round_magnitude"],
        round_significant_digits=saved["round_significant_digits"],
    )
