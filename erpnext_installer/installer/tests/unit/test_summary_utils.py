import unittest

from erpnext_installer.installer.configs.constants.enums import InstallVersion
from erpnext_installer.installer.core.configuration import Configuration
from erpnext_installer.installer.utils.summary_utils import (
    MASKED_VALUE,
    SUMMARY_LABEL_EMAIL,
    SUMMARY_LABEL_PASSWORD,
    build_configuration_summary_items,
    format_summary_value,
    render_summary_lines,
)


class TestSummaryUtils(unittest.TestCase):

    def setUp(self):
        self.with_certs = Configuration(
            install_version=InstallVersion.EDGE,
            mysql_root_password="secret123",
            sites="shop.example.com",
            letsencrypt_email="admin@example.com",
            setup_networking=True,
            setup_letsencrypt=True,
        )
        self.without_certs = Configuration(
            install_version=InstallVersion.VERSION_12,
            mysql_root_password="secret123",
            sites="shop.example.com",
        )

    def test_password_is_masked(self):
        self.assertEqual(format_summary_value(SUMMARY_LABEL_PASSWORD, "secret123"), MASKED_VALUE)
        self.assertEqual(format_summary_value(SUMMARY_LABEL_PASSWORD, ""), "Not set")
        for line in render_summary_lines(self.with_certs):
            self.assertNotIn("secret123", line)

    def test_email_only_with_certificates(self):
        labels = [label for label, _ in build_configuration_summary_items(self.with_certs)]
        self.assertIn(SUMMARY_LABEL_EMAIL, labels)
        labels = [label for label, _ in build_configuration_summary_items(self.without_certs)]
        self.assertNotIn(SUMMARY_LABEL_EMAIL, labels)

    def test_values_rendered(self):
        text = "\n".join(render_summary_lines(self.without_certs))
        self.assertIn("version-12", text)
        self.assertIn("shop.example.com", text)
        self.assertIn("No", text)

    def test_empty_value(self):
        self.assertEqual(format_summary_value("Sites", ""), "Not set")
        self.assertEqual(format_summary_value("Sites", None), "Not set")


if __name__ == "__main__":
    unittest.main()
