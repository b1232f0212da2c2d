from setuptools import setup, find_packages

setup(
    name='JSGettext',
    version='0.1.dev0',
    description='Extracts gettext messages from JavaScript and TypeScript '
                'sources into POT files',
    packages=find_packages(exclude=['tests', 'tests.*']),
    license='BSD',
    install_requires=[
        'tree-sitter>=0.23',
        'tree-sitter-javascript>=0.23',
        'tree-sitter-typescript>=0.23',
        'click',
    ],
    extras_require={
        'test': ['pytest'],
    }
)
