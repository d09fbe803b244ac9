# see https://github.com/karlicoss/pymplate for up-to-date reference
from setuptools import setup, find_namespace_packages # type: ignore


def main() -> None:
    # works with both ordinary and namespace packages
    pkgs = find_namespace_packages('src')
    pkg = min(pkgs)
    setup(
        name='clipboard-sanitizer',
        use_scm_version={
            'version_scheme': 'python-simplified-semver',
            'local_scheme': 'dirty-tag',
            # when building outside of a git checkout (e.g. from an sdist)
            'fallback_version': '0.1.0',
        },
        setup_requires=['setuptools_scm'],

        # otherwise mypy won't work
        # https://mypy.readthedocs.io/en/stable/installed_packages.html#making-pep-561-compatible-packages
        zip_safe=False,

        packages=pkgs,
        package_dir={'': 'src'},
        # necessary so that package works with mypy
        package_data={pkg: ['py.typed']},

        description='Strips tracking parameters from urls in the clipboard',
        license='GPL-3.0-or-later',

        python_requires='>=3.11', # tomllib
        install_requires=[
            'appdirs'  , # for portable user directories detection
            'logzero'  , # pretty colored logging
            'pyperclip', # cross platform clipboard access
        ],
        extras_require={
            'testing': [
                'pytest',
                'pytest-timeout',
                'hypothesis',

                'ruff',
                'mypy',
            ],
        },
        entry_points={
            'console_scripts': ['clipboard-sanitizer=clipboard_sanitizer.__main__:main'],
        }
    )


if __name__ == "__main__":
    main()
