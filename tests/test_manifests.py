import shutil
import tempfile
import unittest
from pathlib import Path

from devstack_provisioner.lib.manifests import ManifestError
from devstack_provisioner.lib.manifests import load_components
from devstack_provisioner.lib.pkg import package_manager_for


class BundledManifest(unittest.TestCase):

    def setUp(self):
        self._components = load_components()

    def test_all_components_present(self):
        self.assertEqual(
            set(self._components),
            {'console', 'database', 'db_admin', 'forge', 'editor', 'android_studio', 'mysql_workbench'})

    def test_required_components_cover_every_distro(self):
        for distro in ('ubuntu', 'debian', 'fedora', 'rhel', 'centos', 'arch', 'opensuse'):
            pm = package_manager_for(distro)
            for cid in ('console', 'database'):
                component = self._components[cid]
                self.assertTrue(component.required)
                self.assertIsNotNone(component.source_for(distro, pm.name), (cid, distro))

    def test_console_starts_cockpit_socket(self):
        source = self._components['console'].source_for('ubuntu', 'apt')
        self.assertEqual(source.packages, ('cockpit',))
        self.assertEqual(source.services, ('cockpit.socket',))
        self.assertEqual(self._components['console'].port, 9090)

    def test_excluded_distro(self):
        db_admin = self._components['db_admin']
        self.assertIsNone(db_admin.source_for('rhel', 'dnf'))
        self.assertIsNotNone(db_admin.source_for('fedora', 'dnf'))

    def test_snap_components_excluded_where_snapd_needs_epel(self):
        for cid in ('forge', 'editor', 'mysql_workbench'):
            component = self._components[cid]
            for distro in ('rhel', 'centos'):
                self.assertIsNone(component.source_for(distro, 'dnf'), (cid, distro))
            self.assertIsNotNone(component.source_for('fedora', 'dnf'), cid)

    def test_desktop_extras_gated(self):
        studio = self._components['android_studio']
        self.assertFalse(studio.is_enabled({'desktop_extras': False}))
        self.assertTrue(studio.is_enabled({'desktop_extras': True}))
        self.assertEqual(studio.source_for('arch', 'pacman').flatpaks, ('com.google.AndroidStudio',))

    def test_skip_components(self):
        forge = self._components['forge']
        self.assertTrue(forge.is_enabled({}))
        self.assertFalse(forge.is_enabled({'skip_components': ['forge']}))


class BrokenManifests(unittest.TestCase):

    def setUp(self):
        self._dir = Path(tempfile.mkdtemp())
        self._path = self._dir / 'components.yaml'

    def tearDown(self):
        shutil.rmtree(self._dir, ignore_errors=True)

    def _load(self, text):
        self._path.write_text(text)
        return load_components(str(self._path))

    def test_top_level_list(self):
        self.assertRaises(ManifestError, self._load, '- console\n')

    def test_unknown_source_key(self):
        text = 'components:\n  x:\n    sources:\n      apt: {debs: [x]}\n'
        self.assertRaises(ManifestError, self._load, text)

    def test_packages_not_a_list(self):
        text = 'components:\n  x:\n    sources:\n      apt: {packages: cockpit}\n'
        self.assertRaises(ManifestError, self._load, text)

    def test_minimal_component(self):
        components = self._load('components:\n  x:\n    sources:\n      apt: {packages: [x]}\n')
        self.assertEqual(components['x'].description, 'x')
        self.assertFalse(components['x'].required)
        self.assertIsNone(components['x'].source_for('arch', 'pacman'))

    def test_invalid_yaml(self):
        self.assertRaises(ManifestError, self._load, 'components:\n  x: [unclosed\n')
