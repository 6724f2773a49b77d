import zipfile
from pathlib import Path

from .exceptions import InstallError


class ArchiveExtractor:

    def __init__(self, log_callback):
        self.log = log_callback

    def extract(self, archive_path, dest_dir):
        """Unpack a zip archive into dest_dir, overwriting files of the same name.

        Raises:
            InstallError: archive missing or malformed, unsafe member paths,
                or destination not writable
        """
        archive_path = Path(archive_path)
        dest_dir = Path(dest_dir)
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
            return self._extract_zip(archive_path, dest_dir)
        except zipfile.BadZipFile as e:
            raise InstallError(f"'{archive_path.name}' is not a valid zip archive") from e
        except OSError as e:
            raise InstallError(f"Could not unpack '{archive_path.name}' into '{dest_dir}': {e}") from e
        except (zipfile.LargeZipFile, NotImplementedError, RuntimeError, EOFError) as e:
            # unsupported compression method, encrypted member, truncated data
            raise InstallError(f"'{archive_path.name}' could not be unpacked: {e}") from e

    def _extract_zip(self, archive_path, dest_dir):
        with zipfile.ZipFile(archive_path, 'r') as zip_ref:
            members = zip_ref.namelist()

            # Zip-slip protection: validate all paths stay within dest_dir
            dest_dir_resolved = dest_dir.resolve()
            for member in members:
                member_path = (dest_dir / member).resolve()
                try:
                    member_path.relative_to(dest_dir_resolved)
                except ValueError:
                    raise InstallError(f"Security: '{archive_path.name}' tries to write outside the "
                                       f"add-on folder ({member}), blocked")

            bad_member = zip_ref.testzip()
            if bad_member is not None:
                raise InstallError(f"'{archive_path.name}' is corrupted (bad CRC for '{bad_member}')")

            self.log(f"  Extracting {len(members)} entries to '{dest_dir}'...", debug=True)
            zip_ref.extractall(dest_dir)
            return members
