"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='hoogle-effect',
	version='0.1.0',
	packages=['hoogle_effect'],
	license='MIT',
	description='Hoogle-style search by type signature over an index of Effect functions',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Documentation",
		"Topic :: Text Processing :: Indexing",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
