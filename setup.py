import os

import setuptools


PACKAGE_ROOT = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(PACKAGE_ROOT, 'README.rst')) as f:
    README = f.read()

with open(os.path.join(PACKAGE_ROOT, 'requirements.txt')) as f:
    REQUIREMENTS = [r.strip() for r in f.readlines() if r.strip()]


setuptools.setup(
    name='async-datastore-client',
    version='1.0.0',
    description='Fluent asyncio client for Google Cloud Datastore',
    long_description=README,
    packages=setuptools.find_packages(exclude=('tests', 'tests.*')),
    python_requires='>= 3.8',
    install_requires=REQUIREMENTS,
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
        ],
    },
    platforms='Posix; MacOS X; Windows',
    include_package_data=True,
    zip_safe=False,
    license='MIT License',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet',
    ],
)
