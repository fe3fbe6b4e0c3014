import ntpath
import posixpath
import unittest

import fsi_paths


class Test(unittest.TestCase):
    def test_relative(self):
        path, parent = fsi_paths.resolve('./assets', '/home/user', posixpath)
        self.assertEqual(path, '/home/user/assets')
        self.assertEqual(parent, '/home/user')

    def test_cleaning(self):
        path, parent = fsi_paths.resolve('/srv//data/./x/../y', '/tmp', posixpath)
        self.assertEqual(path, '/srv/data/y')
        self.assertEqual(parent, '/srv/data')

        path, parent = fsi_paths.resolve('../..', '/a/b/c', posixpath)
        self.assertEqual((path, parent), ('/a', '/'))

    def test_root(self):
        self.assertEqual(fsi_paths.resolve('/', '/tmp', posixpath), ('/', '/'))

    def test_leading_double_slash(self):
        self.assertEqual(
            fsi_paths.resolve('//srv//data', '/tmp', posixpath), ('/srv/data', '/srv')
        )
        self.assertEqual(fsi_paths.resolve('///x', '/tmp', posixpath), ('/x', '/'))
        self.assertEqual(fsi_paths.resolve('x', '//home/user', posixpath)[0], '/home/user/x')

    def test_idempotent(self):
        for flavor, cwd, relative in (
            (posixpath, '/home/user', ['a', 'a/b/..', '.', '../x', 'x//y/']),
            (ntpath, 'C:\\Users\\me', ['a', 'a\\b\\..', '.', '..\\x', 'x/y']),
        ):
            for rel in relative:
                path, _ = fsi_paths.resolve(rel, cwd, flavor)
                self.assertEqual(path, fsi_paths.resolve(path, cwd, flavor)[0])

    def test_windows_slashes(self):
        path, parent = fsi_paths.resolve('docs\\letters', 'C:\\Users\\me', ntpath)
        self.assertEqual(path, 'C:/Users/me/docs/letters')
        self.assertEqual(parent, 'C:/Users/me/docs')
        self.assertNotIn('\\', path + parent)

    def test_windows_drive_root(self):
        path, parent = fsi_paths.resolve('C:\\', 'D:\\', ntpath)
        self.assertEqual((path, parent), ('C:/', 'C:/'))

        path, parent = fsi_paths.resolve('C:\\.', 'D:\\', ntpath)
        self.assertFalse(path.endswith('.'))
        self.assertFalse(parent.endswith('.'))

    def test_to_slash(self):
        self.assertEqual(fsi_paths.to_slash('C:\\a\\b', ntpath), 'C:/a/b')
        self.assertEqual(fsi_paths.to_slash('/a/b', posixpath), '/a/b')


if __name__ == '__main__':
    unittest.main()
