import io
import os
import errno
import shutil
import logging
from concurrent.futures import ThreadPoolExecutor, FIRST_EXCEPTION, wait

from .parser import parse
from .errors import OutputError
from .loaders import FileSystemLoader
from .printer import Printer
from .extractor import Extractor


log = logging.getLogger(__name__)

POT_TEMPLATE = '{}.pot'


def extract_file(path, catalog, relative_to=None, loader=None):
    loader = loader or FileSystemLoader()
    source = loader.load(path)
    node, comments = parse(source)
    count = Extractor.extract(node, catalog, source, comments,
                              relative_to=relative_to)
    log.debug('Extracted %d messages from %s', count, path)
    return count


def extract_files(paths, catalog, relative_to=None, jobs=None):
    """Extracts messages from every file into the catalog.

    Files are processed on a thread pool, the first failure cancels pending
    files and is re-raised.
    """
    with ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = [executor.submit(extract_file, path, catalog, relative_to)
                   for path in paths]
        done, not_done = wait(futures, return_when=FIRST_EXCEPTION)
        for future in not_done:
            future.cancel()
        for future in futures:
            if future in done and future.exception() is not None:
                raise future.exception()
    return sum(future.result() for future in futures)


def prepare_output(folder):
    try:
        shutil.rmtree(folder)
    except OSError as e:
        if e.errno != errno.ENOENT:
            log.warning('Failed to clear %s: %s', folder, e)
    try:
        os.makedirs(folder, exist_ok=True)
    except OSError as e:
        raise OutputError('Failed to create output folder {}: {}'
                          .format(folder, e))


def write_catalog(catalog, folder):
    """Writes every domain of the catalog into ``<domain>.pot`` file.

    All domains are attempted, failed ones are reported together afterwards.
    """
    written, failed = [], []
    for domain in catalog:
        file_path = os.path.join(folder, POT_TEMPLATE.format(domain.name))
        try:
            with io.open(file_path, 'w', encoding='utf-8',
                         newline='\n') as f:
                f.write(Printer.dumps(domain))
        except (IOError, OSError) as e:
            log.error('Failed to write %s: %s', file_path, e)
            failed.append(domain.name)
        else:
            log.info('Wrote %d messages into %s', len(domain), file_path)
            written.append(file_path)
    if failed:
        raise OutputError('Failed to write domains: {}'
                          .format(', '.join(failed)))
    return written
