#!/usr/bin/env python
import os
from setuptools import setup, find_packages


# Figure out the version. This could also be done by importing the
# module, the parsing takes place for historical reasons.
import re
here = os.path.dirname(os.path.abspath(__file__))
version_re = re.compile(
    r'__version__ = (\(.*?\))')
fp = open(os.path.join(here, 'src/compass_rails', '__init__.py'))
version = None
for line in fp:
    match = version_re.search(line)
    if match:
        version = eval(match.group(1))
        break
else:
    raise Exception("Cannot find version in __init__.py")
fp.close()


setup(
    name='compass-rails',
    version=".".join(map(str, version)),
    description='Integrates the Compass stylesheet framework into the '
        'asset pipeline of a Rails-style web framework',
    long_description='Boots the host application when needed, copies the '
        'options set in the compass configuration over to sass, and '
        'points the asset pipeline at the stylesheet and image '
        'directories of the application and its engines.',
    license='BSD',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
        'Topic :: Software Development :: Libraries',
        ],
    python_requires='>=3.8',
    install_requires=['PyYAML'],
    extras_require={'test': ['pytest']},
    packages=find_packages('src'),
    package_dir={'': 'src'},
)
