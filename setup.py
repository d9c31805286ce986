"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='plar-lang',
	version='0.1.0',
	packages=['plar', "plar.tree_walker", "plar.adapters", ],
	package_data={
		'plar': ["Plar.lark"],
	},
	entry_points={
		'console_scripts': ["plar = plar.cmdline:main"],
	},
	license='MIT',
	description='A tree-walking interpreter for Plar, a small object-oriented language with Portuguese keywords',
	long_description=open('README.md', encoding='utf-8').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Environment :: Console",
		"Natural Language :: Portuguese (Brazilian)",
	],
	python_requires='>=3.9',
	install_requires=[
		"lark>=1.1",
	],
)
