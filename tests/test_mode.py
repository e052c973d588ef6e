import unittest

from dualfraction.config import (
    ARITHMETIC_ENV_VAR,
    Configuration,
    configuration_from_environment,
)
from dualfraction.exceptions import ConfigurationError, FractionError
from dualfraction.mode import Mode, ModeSelector, current_mode, selector


class ConfigurationTests(unittest.TestCase):
    def test_unset_variable_selects_switchable(self):
        self.assertIs(configuration_from_environment({}), Configuration.SWITCHABLE)
        self.assertIs(configuration_from_environment({ARITHMETIC_ENV_VAR: "  "}), Configuration.SWITCHABLE)

    def test_names_are_case_insensitive(self):
        self.assertIs(configuration_from_environment({ARITHMETIC_ENV_VAR: "Exact "}), Configuration.EXACT)
        self.assertIs(
            configuration_from_environment({ARITHMETIC_ENV_VAR: "APPROXIMATE"}), Configuration.APPROXIMATE
        )

    def test_unknown_name_is_rejected(self):
        with self.assertRaises(ConfigurationError) as ctx:
            configuration_from_environment({ARITHMETIC_ENV_VAR: "bogus"})
        self.assertIn("bogus", str(ctx.exception))
        self.assertIsInstance(ctx.exception, FractionError)

    def test_fixed_configurations(self):
        self.assertTrue(Configuration.EXACT.is_fixed)
        self.assertTrue(Configuration.APPROXIMATE.is_fixed)
        self.assertFalse(Configuration.SWITCHABLE.is_fixed)


class ModeSelectorTests(unittest.TestCase):
    def test_switchable_defaults_to_exact_and_toggles(self):
        modes = ModeSelector(Configuration.SWITCHABLE)
        self.assertIs(modes.get(), Mode.EXACT)
        modes.set(Mode.APPROXIMATE)
        self.assertIs(modes.get(), Mode.APPROXIMATE)
        modes.set(Mode.APPROXIMATE)
        self.assertIs(modes.get(), Mode.APPROXIMATE)
        modes.set(Mode.EXACT)
        self.assertIs(modes.get(), Mode.EXACT)

    def test_switchable_default_can_be_overridden(self):
        modes = ModeSelector(Configuration.SWITCHABLE, default=Mode.APPROXIMATE)
        self.assertIs(modes.get(), Mode.APPROXIMATE)

    def test_fixed_configuration_refuses_the_other_mode(self):
        modes = ModeSelector(Configuration.EXACT)
        modes.set(Mode.EXACT)
        self.assertIs(modes.get(), Mode.EXACT)
        with self.assertRaises(ConfigurationError):
            modes.set(Mode.APPROXIMATE)
        self.assertIs(modes.get(), Mode.EXACT)

        modes = ModeSelector(Configuration.APPROXIMATE, default=Mode.EXACT)
        self.assertIs(modes.get(), Mode.APPROXIMATE)
        with self.assertRaises(ConfigurationError):
            modes.set(Mode.EXACT)

    def test_rejects_non_modes(self):
        modes = ModeSelector(Configuration.SWITCHABLE)
        with self.assertRaises(TypeError):
            modes.set("exact")
        with self.assertRaises(TypeError):
            modes.set(True)

    def test_process_selector_matches_configuration(self):
        process = selector()
        self.assertIs(current_mode(), process.get())
        if process.configuration is Configuration.APPROXIMATE:
            self.assertIs(current_mode(), Mode.APPROXIMATE)
        elif process.configuration is Configuration.EXACT:
            self.assertIs(current_mode(), Mode.EXACT)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
