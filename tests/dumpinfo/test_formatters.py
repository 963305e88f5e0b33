import unittest

from dumpinfo.formatters import (
    escape_line,
    format_agent,
    format_failure,
    format_host,
    format_key_value,
    format_plugin,
    format_tool,
)
from dumpinfo.records import AgentRecord, HostIdentity, KeyValueItem, PluginRecord, ToolRecord, key_value


class FormatterTests(unittest.TestCase):
    def test_host_line(self):
        self.assertEqual(format_host(HostIdentity("Jenkins", "2.440", "built-in")), "Jenkins 2.440 (node: built-in)")
        self.assertEqual(format_host(HostIdentity("local", None, "ci-box")), "local (node: ci-box)")
        self.assertEqual(format_host(None), "<unknown> (node: <unknown>)")

    def test_agent_line(self):
        self.assertEqual(format_agent(AgentRecord("node-1", True, 2)), "node-1: online, 2 executors")
        self.assertEqual(format_agent(AgentRecord("node-2", False, 1)), "node-2: offline, 1 executor")
        self.assertEqual(format_agent(AgentRecord("node-3", False, 0)), "node-3: offline, 0 executors")
        self.assertEqual(format_agent(AgentRecord(None)), "<unknown>: <unknown>, <unknown> executors")

    def test_tool_line(self):
        self.assertEqual(format_tool(ToolRecord("jdk-17", "/usr/lib/jvm/jdk-17")), "jdk-17: /usr/lib/jvm/jdk-17")
        self.assertEqual(format_tool(ToolRecord("jdk-8", "")), "jdk-8: <unknown>")

    def test_plugin_line(self):
        self.assertEqual(
            format_plugin(PluginRecord("git", "Git plugin", "5.2.1", True)),
            "git (Git plugin) 5.2.1, enabled",
        )
        self.assertEqual(
            format_plugin(PluginRecord("ldap", None, "711.vb_d1a_", False)),
            "ldap (<unknown>) 711.vb_d1a_, disabled",
        )

    def test_key_value_placeholders(self):
        self.assertEqual(format_key_value(KeyValueItem("PATH", "/usr/bin")), "PATH = /usr/bin")
        self.assertEqual(format_key_value(KeyValueItem("EMPTY", "")), "EMPTY = <empty>")
        self.assertEqual(format_key_value(KeyValueItem("MISSING", None)), "MISSING = <unset>")
        self.assertEqual(format_key_value(KeyValueItem("A", "x = y")), "A = x = y")

    def test_sensitive_values_are_masked(self):
        item = key_value("JENKINS_API_TOKEN", "11deadbeef")
        self.assertTrue(item.sensitive)
        self.assertEqual(format_key_value(item), "JENKINS_API_TOKEN = <masked, 10 chars>")
        self.assertTrue(key_value("ldap.manager.password", "x").sensitive)
        self.assertFalse(key_value("JENKINS_API_TOKEN", "x", mask=False).sensitive)
        self.assertFalse(key_value("PATH", "/bin").sensitive)

    def test_masking_matches_whole_words(self):
        for key in ("GIT_AUTHOR_NAME", "XAUTHORITY", "java.security.auth.login.config", "TOKENIZERS_PARALLELISM"):
            self.assertFalse(key_value(key, "x").sensitive, key)
        for key in ("GITHUB_TOKEN", "javax.net.ssl.keyStorePassword", "HTTP_AUTHORIZATION", "npm-basic-auth", "aws_secret_access_key"):
            self.assertTrue(key_value(key, "x").sensitive, key)

    def test_line_breaks_are_escaped(self):
        for raw in ("a\nb", "a\r\nb", "a\rb", "a\x0bb", "a\x85b", "a\u2028b", "a\u2029b"):
            line = format_key_value(KeyValueItem("K", raw))
            self.assertEqual(len(line.splitlines()), 1, raw)
        self.assertEqual(escape_line("one\ntwo"), "one\\ntwo")
        self.assertEqual(escape_line("C:\\tools\\jdk"), "C:\\tools\\jdk")
        self.assertEqual(format_tool(ToolRecord("jdk\n17", "/opt")), "jdk\\n17: /opt")

    def test_undecodable_bytes_become_utf8_escapes(self):
        line = format_key_value(KeyValueItem("LANG_NOTE", "caf\udce9"))
        self.assertEqual(line, "LANG_NOTE = caf\\udce9")
        line.encode("utf-8")
        self.assertEqual(escape_line("caf\u00e9"), "caf\u00e9")

    def test_backslashes_are_not_escaped(self):
        self.assertEqual(escape_line("a\\nb"), escape_line("a\nb"))

    def test_formatters_are_stable(self):
        plugin = PluginRecord("workflow-aggregator", "Pipeline", "596.v8c21c963d92d", True)
        self.assertEqual(format_plugin(plugin), format_plugin(plugin))

    def test_failure_marker_is_one_line(self):
        line = format_failure("tools", RuntimeError("first\nsecond"))
        self.assertEqual(line, "[dumpinfo] tools: unavailable (RuntimeError: first\\nsecond)")
        self.assertEqual(format_failure("tools", TimeoutError()), "[dumpinfo] tools: unavailable (TimeoutError)")


if __name__ == "__main__":
    unittest.main()
