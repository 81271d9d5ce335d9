from setuptools import setup

setup(
    name='gst_tds_calculator',
    version='0.1',
    py_modules=[
        'exceptions',
        'state_codes',
        'gst_verifier',
        'gst_calculator',
        'tds_calculator',
        'tax_register',
        'reporter',
        'main',
    ],
    install_requires=[
        'pandas>=2.3.0',
        'numpy>=1.26.0',
        'openpyxl>=3.1.1',
        'chardet>=5.0.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'gst-tds-calc=main:main',
        ],
    },
)
