import os
import tempfile
import unittest
from pathlib import Path

from treedup.utils.filesystem import LocalFileSystem, NodeKind, classify


class ClassifyTest(unittest.TestCase):
    """Tests for classify()."""

    def test_kinds(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir)
            (base / 'file').write_text('x')
            (base / 'dir').mkdir()
            os.symlink('dir', base / 'link')

            self.assertEqual(NodeKind.FILE, classify((base / 'file').lstat()))
            self.assertEqual(NodeKind.DIRECTORY, classify((base / 'dir').lstat()))
            self.assertEqual(NodeKind.SYMLINK, classify((base / 'link').lstat()))

    @unittest.skipUnless(hasattr(os, 'mkfifo'), 'requires named pipes')
    def test_fifo_is_other(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            pipe = Path(tmpdir) / 'pipe'
            os.mkfifo(pipe)
            self.assertEqual(NodeKind.OTHER, classify(pipe.lstat()))


class LocalFileSystemTest(unittest.TestCase):
    """Tests for LocalFileSystem."""

    def test_stat_does_not_follow_symlinks(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir)
            (base / 'dir').mkdir()
            os.symlink('dir', base / 'link')

            fs = LocalFileSystem()

            self.assertEqual(NodeKind.SYMLINK, classify(fs.stat_no_follow(base / 'link')))

    def test_stat_dangling_symlink(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            link = Path(tmpdir) / 'link'
            os.symlink('missing', link)

            self.assertEqual(NodeKind.SYMLINK, classify(LocalFileSystem().stat_no_follow(link)))

    def test_list_children(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir)
            (base / 'a').write_text('x')
            (base / 'b').mkdir()

            children = sorted(LocalFileSystem().list_children(base))

            self.assertEqual([('a', base / 'a'), ('b', base / 'b')], children)

    def test_list_children_of_missing_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                LocalFileSystem().list_children(Path(tmpdir) / 'missing')

    def test_open_for_read(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'file'
            path.write_bytes(b'content')

            with LocalFileSystem().open_for_read(path) as stream:
                self.assertEqual(b'content', stream.read(1024))
                self.assertEqual(b'', stream.read(1024))

    def test_read_link_target_is_literal(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            link = Path(tmpdir) / 'link'
            os.symlink('../some/where', link)

            self.assertEqual('../some/where', LocalFileSystem().read_link_target(link))

    def test_read_link_target_of_regular_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'file'
            path.write_text('x')

            with self.assertRaises(OSError):
                LocalFileSystem().read_link_target(path)


if __name__ == '__main__':
    unittest.main()
