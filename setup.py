import os
from setuptools import setup

# Utility function to read the README file.
# Used for the long_description.
def read(fname):
    return open(os.path.join(os.path.dirname(__file__), fname)).read()

setup(
    name="groupmax",
    version="0.1.0",
    description=("Split an ordered series of efforts into contiguous groups with the smallest sum of group maxima."),
    license="BSD",
    keywords="partition dynamic-programming",
    packages=['groupmax'],
    long_description=read('README'),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Topic :: Utilities",
        "License :: OSI Approved :: BSD License",
    ],
    python_requires='>=3.8',
    install_requires=[
        'Click>=8.2',
        'numpy',
        'pandas',
        'numba',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points='''
        [console_scripts]
        groupmax=groupmax.cli:cli
        groupbench=groupmax.benchmark:cli
    ''',
)
