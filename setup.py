# setup.py
from setuptools import setup, find_packages

setup(
    name='dateinput',
    version='0.1.0',
    description='A theme-aware bootstrap-datepicker date input widget for server-rendered web apps.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',

    # Finds the `dateinput` and `dateinput_cli` packages
    packages=find_packages(exclude=['dateinput.tests']),

    # Ship the SCSS template the themed stylesheet is compiled from.
    include_package_data=True,
    package_data={
        'dateinput': ['www/datepicker/scss/*.scss'],
    },

    install_requires=[
        'PyYAML',
        'typer',
        'libsass',
        'xxhash',
    ],
    extras_require={
        'test': ['pytest'],
    },

    entry_points={
        'console_scripts': [
            'dateinput = dateinput_cli.main:app',
        ],
    },

    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: User Interfaces',
    ],
    python_requires='>=3.10',
)
