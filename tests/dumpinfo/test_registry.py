import unittest

from dumpinfo import CategoryRegistry, describe_category, list_loaded, registry
from dumpinfo.errors import CategoryAlreadyRegistered, CategoryNotFound
from dumpinfo.formatters import format_key_value
from engine import bootstrap_categories


def _query(providers):
    return providers.environment_variables()


class CategoryRegistryTests(unittest.TestCase):
    def test_duplicate_registration_rejected(self):
        table = CategoryRegistry()
        table.register(category_id="env", query=_query, formatter=format_key_value, position=10)
        with self.assertRaises(CategoryAlreadyRegistered) as caught:
            table.register(category_id="env", query=_query, formatter=format_key_value, position=20)
        self.assertEqual(caught.exception.category_id, "env")

    def test_alias_collision_rejected(self):
        table = CategoryRegistry()
        table.register(category_id="environment_variables", query=_query, formatter=format_key_value, position=10, aliases=("env",))
        with self.assertRaises(CategoryAlreadyRegistered):
            table.register(category_id="env", query=_query, formatter=format_key_value, position=20)

    def test_resolve_alias(self):
        table = CategoryRegistry()
        table.register(
            category_id="environment_variables",
            query=_query,
            formatter=format_key_value,
            position=10,
            aliases=("environmentVariables",),
        )
        self.assertEqual(table.resolve("environmentVariables"), "environment_variables")
        self.assertEqual(table.get("environmentVariables").category_id, "environment_variables")
        with self.assertRaises(CategoryNotFound):
            table.resolve("environment")

    def test_categories_sorted_by_position(self):
        table = CategoryRegistry()
        table.register(category_id="late", query=_query, formatter=format_key_value, position=90)
        table.register(category_id="early", query=_query, formatter=format_key_value, position=5)
        table.register(category_id="middle", query=_query, formatter=format_key_value, position=50)
        self.assertEqual(table.ids(), ["early", "middle", "late"])


class BootstrapTests(unittest.TestCase):
    def test_builtin_categories_in_report_order(self):
        registered = bootstrap_categories()
        self.assertEqual(
            list(registered),
            [
                "agents",
                "tools",
                "plugins",
                "system_properties",
                "environment_variables",
                "directory_bindings",
            ],
        )
        self.assertEqual(registry().ids(), list(registered))

    def test_bootstrap_is_repeatable(self):
        bootstrap_categories()
        bootstrap_categories()
        self.assertEqual(len(registry().ids()), 6)
        self.assertIn("agents", list_loaded())

    def test_describe_category_by_alias(self):
        bootstrap_categories()
        described = describe_category("systemProperties")
        self.assertEqual(described["id"], "system_properties")
        self.assertIn("systemProperties", described["aliases"])

    def test_announce_receives_each_category(self):
        messages = []
        bootstrap_categories(announce=messages.append)
        self.assertEqual(len(messages), 6)
        self.assertTrue(all(message.startswith("[✓] category loaded: ") for message in messages))


if __name__ == "__main__":
    unittest.main()
