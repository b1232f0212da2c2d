import os
import logging
from collections import namedtuple

import click

from .catalog import DEFAULT_DOMAIN
from .errors import UserError


log = logging.getLogger('jsgettext')

# directory markers match whole path segments only
DEFAULT_EXCLUDE = (
    os.sep + 'node_modules' + os.sep,
    os.sep + '.git' + os.sep,
    os.sep + 'dist' + os.sep,
    os.sep + 'build' + os.sep,
    os.sep + '__tests__' + os.sep,
    '.test.',
    '.spec.',
)


def maybe_exit(ctx, exit_code=1):
    if not ctx.obj.debug:
        ctx.exit(exit_code)


GlobalOptions = namedtuple('GlobalOptions', 'verbose debug')

Options = namedtuple('Options', 'path output_folder exclude '
                                'references_relative_to default_domain jobs')


@click.group()
@click.option('-v', '--verbose', is_flag=True)
@click.option('--debug', is_flag=True)
@click.pass_context
def cli(ctx, verbose, debug):
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)
    ctx.obj = GlobalOptions(verbose, debug)


@cli.command('extract')
@click.option('--path', default='.', show_default=True,
              type=click.Path(exists=True, file_okay=False, readable=True),
              help='Directory to search for source files.')
@click.option('--output-folder', required=True,
              type=click.Path(file_okay=False),
              help='Directory for the generated POT files.')
@click.option('--exclude', multiple=True, default=DEFAULT_EXCLUDE,
              show_default=True,
              help='Skip files whose path contains this substring.')
@click.option('--references-relative-to', type=click.Path(file_okay=False),
              help='Base directory of references, defaults to the output '
                   'folder.')
@click.option('--default-domain', default=DEFAULT_DOMAIN, show_default=True)
@click.option('-j', '--jobs', type=click.IntRange(min=1),
              help='Number of worker threads.')
@click.pass_context
def extract(ctx, path, output_folder, exclude, references_relative_to,
            default_domain, jobs):
    """Extract translatable messages from JavaScript and TypeScript sources
    into POT files, one per domain."""
    from .catalog import Catalog
    from .loaders import find_sources
    from .extract import extract_files, prepare_output, write_catalog

    options = Options(path, output_folder, tuple(exclude),
                      references_relative_to or output_folder,
                      default_domain, jobs)

    try:
        prepare_output(options.output_folder)
        paths = list(find_sources(options.path, options.exclude))
    except UserError as e:
        click.echo(str(e), err=True)
        maybe_exit(ctx)
        raise
    log.info('Found %d source files in %s', len(paths), options.path)

    catalog = Catalog(options.default_domain)
    try:
        extract_files(paths, catalog,
                      relative_to=options.references_relative_to,
                      jobs=options.jobs)
    except UserError as e:
        click.echo(str(e), err=True)
        maybe_exit(ctx)
        raise

    try:
        write_catalog(catalog, options.output_folder)
    except UserError as e:
        click.echo(str(e), err=True)
        maybe_exit(ctx)
        raise


if __name__ == '__main__':
    cli.main(prog_name='python -m jsgettext')
