"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='yarnball',
	version='0.1.0',
	packages=['yarnball', ],
	license='MIT',
	description='String helpers for embedded expression languages: substrings, search, PCRE-style patterns, encodings and sensible cropping',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Text Processing",
	],
	python_requires='>=3.9',
	install_requires=[
		"regex>=2023.0",
	]
)
