"""Tests for the command metadata catalog."""

import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from cmdpredict.catalog import CommandCatalog, load_catalog
from cmdpredict.errors import ModelLoadError

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


class TestCommandCatalog(unittest.TestCase):

    def setUp(self):
        self.catalog = CommandCatalog({
            "Get-AzStorageAccount": {"parameters": [
                {"name": "Name", "position": 1, "aliases": ["StorageAccountName", "AccountName"]},
                {"name": "ResourceGroupName", "position": 0},
                "IncludeGeoReplicationStats",
                "DefaultProfile",
            ]},
            "New-AzADGroup": ["DisplayName", "MailNickname", "Description"],
        })

    def test_has_command_case_insensitive(self):
        self.assertTrue(self.catalog.has_command("get-azstorageaccount"))
        self.assertIn("NEW-AZADGROUP", self.catalog)
        self.assertFalse(self.catalog.has_command("git"))
        self.assertFalse(self.catalog.has_command(None))

    def test_positional_order(self):
        self.assertEqual(
            self.catalog.positional_parameters("Get-AzStorageAccount"),
            ["ResourceGroupName", "Name"],
        )
        self.assertEqual(self.catalog.positional_parameters("New-AzADGroup"), [])
        self.assertEqual(self.catalog.positional_parameters("unknown"), [])

    def test_parameter_names(self):
        self.assertEqual(self.catalog.parameter_names("New-AzADGroup"),
                         ["DisplayName", "MailNickname", "Description"])

    def test_resolve_exact(self):
        self.assertEqual(self.catalog.resolve_alias("Get-AzStorageAccount", "NAME"), "Name")

    def test_resolve_alias(self):
        self.assertEqual(self.catalog.resolve_alias("Get-AzStorageAccount", "accountname"), "Name")

    def test_resolve_unique_prefix(self):
        self.assertEqual(self.catalog.resolve_alias("Get-AzStorageAccount", "Inc"), "IncludeGeoReplicationStats")
        self.assertEqual(self.catalog.resolve_alias("Get-AzStorageAccount", "Stor"), "Name")

    def test_exact_wins_over_prefix(self):
        catalog = CommandCatalog({"Get-AzVM": ["Name", "NameFilter"]})
        self.assertEqual(catalog.resolve_alias("Get-AzVM", "name"), "Name")
        self.assertIsNone(catalog.resolve_alias("Get-AzVM", "Na"))

    def test_ambiguous_prefix(self):
        self.assertIsNone(self.catalog.resolve_alias("New-AzADGroup", "D"))

    def test_unknown(self):
        self.assertIsNone(self.catalog.resolve_alias("New-AzADGroup", "Owner"))
        self.assertIsNone(self.catalog.resolve_alias("git", "status"))

    def test_duplicate_positions_rejected(self):
        with self.assertRaises(ModelLoadError):
            CommandCatalog({"Cmd": {"parameters": [
                {"name": "A", "position": 0},
                {"name": "B", "position": 0},
            ]}})

    def test_bad_entry_rejected(self):
        with self.assertRaises(ModelLoadError):
            CommandCatalog({"Cmd": {"parameters": [{"position": 0}]}})


class TestLoadCatalog(unittest.TestCase):

    def test_yaml_fixture(self):
        catalog = load_catalog(os.path.join(DATA_DIR, "catalog.yaml"))
        self.assertEqual(
            catalog.positional_parameters("New-AzResourceGroup"),
            ["Name", "Location"],
        )
        self.assertEqual(catalog.resolve_alias("New-AzADGroup", "Mail"), "MailNickname")

    def test_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "catalog.json")
            with open(path, "w") as f:
                f.write('{"commands": {"Get-AzVM": ["Name", "ResourceGroupName"]}}')
            catalog = load_catalog(path)
        self.assertEqual(catalog.parameter_names("get-azvm"), ["Name", "ResourceGroupName"])

    def test_missing_commands(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "catalog.json")
            with open(path, "w") as f:
                f.write('{"cmds": {}}')
            with self.assertRaises(ModelLoadError):
                load_catalog(path)


if __name__ == "__main__":
    unittest.main()
