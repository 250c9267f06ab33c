from gas_estimation.tests.fixtures.providers import *  # noqa: F401, F403
