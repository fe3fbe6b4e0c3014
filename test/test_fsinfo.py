import os
import tempfile
import unittest
from unittest import mock

import fsinfo
import fsi_probes
from fsi_models import VolumeEntry
from fsi_listing import DirectoryLister, ListerConfig


class Test(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        for name in ('a', 'b'):
            os.mkdir(os.path.join(self._tmp.name, name))
        for name in ('.hidden', 'one', 'two'):
            open(os.path.join(self._tmp.name, name), 'w').close()

        lister = DirectoryLister(ListerConfig(working_directory=self._tmp.name))
        patcher = mock.patch.object(fsinfo, '_lister', lister)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_list(self):
        listing = fsinfo.resolve_and_list_directory('.')
        self.assertEqual(len(listing.folders), 2)
        self.assertEqual(len(listing.files), 3)

        fsinfo.set_hide_dotfiles(True)
        self.assertTrue(fsinfo.get_hide_dotfiles())
        listing = fsinfo.resolve_and_list_directory('.')
        self.assertEqual(len(listing.folders), 2)
        self.assertEqual(sorted(f.name for f in listing.files), ['one', 'two'])

        fsinfo.set_hide_dotfiles(False)
        self.assertEqual(len(fsinfo.resolve_and_list_directory('.').files), 3)

    def test_list_missing(self):
        with self.assertRaises(FileNotFoundError):
            fsinfo.resolve_and_list_directory('missing/folder')

    def test_home(self):
        home = fsinfo.get_home_directory()
        self.assertNotIn('\\', home)
        self.assertTrue(home)

    def test_home_missing(self):
        with mock.patch('os.path.expanduser', return_value='~'):
            self.assertRaises(RuntimeError, fsinfo.get_home_directory)

    def test_format(self):
        self.assertEqual(fsinfo.format_byte_size(1536), '1.5 KB')

    def test_volumes(self):
        volumes = [VolumeEntry('File system', '/')]
        probe = mock.Mock()
        probe.get_volumes.return_value = volumes
        with mock.patch('fsi_probes.get_probe', return_value=probe):
            self.assertEqual(fsinfo.enumerate_volumes(), volumes)

    def test_default_lister_working_directory(self):
        with mock.patch.object(fsinfo, '_lister', None), mock.patch(
            'os.getcwd', return_value='/somewhere/else'
        ):
            lister = fsinfo.get_lister()
            self.assertEqual(lister.config.working_directory, fsinfo.WORKING_DIRECTORY)
            self.assertIs(fsinfo.get_lister(), lister)
        self.assertNotEqual(fsinfo.WORKING_DIRECTORY, '/somewhere/else')

    def test_volumes_unsupported(self):
        error = fsi_probes.UnsupportedPlatform('nope')
        with mock.patch('fsi_probes.get_probe', side_effect=error):
            self.assertEqual(fsinfo.enumerate_volumes(), [])


if __name__ == '__main__':
    unittest.main()
