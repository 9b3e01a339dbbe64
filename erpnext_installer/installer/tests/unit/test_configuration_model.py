import dataclasses
import unittest

from erpnext_installer.installer.configs.constants.config_env_var_keys import (
    KEY_ENV_LETSENCRYPT_EMAIL,
    KEY_ENV_MYSQL_ROOT_PASSWORD,
    KEY_ENV_SITES,
    KEY_ENV_VERSION,
)
from erpnext_installer.installer.configs.constants.enums import InstallVersion
from erpnext_installer.installer.core.configuration import Configuration
from erpnext_installer.installer.utils.exceptions import ConfigurationError


class TestConfiguration(unittest.TestCase):

    def test_letsencrypt_requires_networking(self):
        with self.assertRaises(ConfigurationError):
            Configuration(
                install_version=InstallVersion.EDGE,
                mysql_root_password="pw",
                sites="a.example.com",
                letsencrypt_email="admin@example.com",
                setup_networking=False,
                setup_letsencrypt=True,
            )

    def test_letsencrypt_requires_email(self):
        with self.assertRaises(ConfigurationError):
            Configuration(
                install_version=InstallVersion.EDGE,
                mysql_root_password="pw",
                sites="a.example.com",
                setup_networking=True,
                setup_letsencrypt=True,
            )

    def test_version_must_be_enumerated(self):
        with self.assertRaises(ConfigurationError):
            Configuration(install_version="version-99", mysql_root_password="pw", sites="a.example.com")

    def test_env_values_with_certificates(self):
        configuration = Configuration(
            install_version=InstallVersion.VERSION_13,
            mysql_root_password="pw",
            sites="a.example.com",
            letsencrypt_email="admin@example.com",
            setup_networking=True,
            setup_letsencrypt=True,
        )
        self.assertEqual(
            configuration.render_env(),
            "VERSION=version-13\nMYSQL_ROOT_PASSWORD=pw\nSITES=a.example.com\nLETSENCRYPT_EMAIL=admin@example.com\n",
        )

    def test_email_omitted_without_certificates(self):
        configuration = Configuration(
            install_version=InstallVersion.VERSION_12,
            mysql_root_password="pw",
            sites="a.example.com",
            letsencrypt_email="admin@example.com",
            setup_networking=True,
        )
        self.assertNotIn("LETSENCRYPT_EMAIL", configuration.to_env_values())
        self.assertEqual(list(configuration.to_env_values()), ["VERSION", "MYSQL_ROOT_PASSWORD", "SITES"])

    def test_written_keys_in_order(self):
        configuration = Configuration(
            install_version=InstallVersion.EDGE,
            mysql_root_password="pw",
            sites="a.example.com",
            letsencrypt_email="admin@example.com",
            setup_networking=True,
            setup_letsencrypt=True,
        )
        self.assertEqual(
            list(configuration.to_env_values()),
            [KEY_ENV_VERSION, KEY_ENV_MYSQL_ROOT_PASSWORD, KEY_ENV_SITES, KEY_ENV_LETSENCRYPT_EMAIL],
        )

    def test_immutable(self):
        configuration = Configuration(install_version=InstallVersion.EDGE, mysql_root_password="pw", sites="a")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            configuration.sites = "b"
        self.assertEqual(configuration.with_values(sites="b").sites, "b")
        self.assertEqual(configuration.sites, "a")

    def test_version_lookup(self):
        self.assertEqual(InstallVersion.from_value("edge"), InstallVersion.EDGE)
        self.assertEqual(InstallVersion.from_value(" version-12 "), InstallVersion.VERSION_12)
        self.assertIsNone(InstallVersion.from_value(""))
        self.assertIsNone(InstallVersion.from_value("latest"))
        self.assertEqual([v.value for v in InstallVersion], ["edge", "version-13", "version-12"])


if __name__ == "__main__":
    unittest.main()
