import os
import re
from codecs import open

from setuptools import find_packages
from setuptools import setup

# Based on https://github.com/pypa/sampleproject/blob/main/setup.py
# and https://python-packaging-user-guide.readthedocs.org/

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()
long_description_content_type = "text/markdown"

with open(os.path.join(here, "htpasswd_verify/version.py")) as f:
    match = re.search(r'VERSION = "(.+?)"', f.read())
    assert match
    VERSION = match.group(1)

setup(
    name="htpasswd-verify",
    version=VERSION,
    description="Verify passwords against Apache htpasswd files (apr1, bcrypt, SHA1, crypt).",
    long_description=long_description,
    long_description_content_type=long_description_content_type,
    license="MIT",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Development Status :: 4 - Beta",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Security",
        "Topic :: Security :: Cryptography",
        "Topic :: Internet :: WWW/HTTP",
        "Typing :: Typed",
    ],
    packages=find_packages(
        include=[
            "htpasswd_verify",
            "htpasswd_verify.*",
        ]
    ),
    entry_points={
        "console_scripts": [
            "htpasswd-verify = htpasswd_verify.tools.main:htpasswd_verify",
        ],
    },
    python_requires=">=3.10",
    # https://packaging.python.org/en/latest/discussions/install-requires-vs-requirements/#install-requires
    # It is not considered best practice to use install_requires to pin dependencies to specific versions.
    install_requires=[
        "bcrypt>=3.1",
        "passlib>=1.6.5, <1.8",
    ],
    extras_require={
        "dev": [
            "pytest-cov>=2.7.1",
            "pytest>=6.1.0",
        ],
    },
)
