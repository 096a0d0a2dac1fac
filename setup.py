from setuptools import setup

setup(
    name="fastinput",
    version="0.2.0",
    description=(
        "Fast reader for line and space delimited input such as competitive programming judge input. "
        "Loads the whole source once and decodes lines and tokens into typed values on demand. "
        "Newline scanning uses the C runtime memchr through cffi."
    ),
    packages=["fastinput", "fastinput.libc"],
    install_requires=["cffi>=1.15.0"],
    extras_require={"test": ["pytest"]},
)
