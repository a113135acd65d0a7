import io
import setuptools

VERSION='0.1.0'

setuptools.setup(name='isowrap',
                 version=VERSION,
                 description='Pure python library to wrap a single file into an ISO9660 image',
                 long_description=io.open('README.md', encoding='UTF-8').read(),
                 long_description_content_type='text/markdown',
                 url='http://github.com/clalancette/isowrap',
                 author='Chris Lalancette',
                 author_email='clalancette@gmail.com',
                 license='LGPLv2',
                 classifiers=['Development Status :: 3 - Alpha',
                              'Intended Audience :: Developers',
                              'License :: OSI Approved :: GNU Lesser General Public License v2 (LGPLv2)',
                              'Natural Language :: English',
                              'Programming Language :: Python :: 3',
                 ],
                 keywords='iso9660 iso ecma119',
                 packages=['isowrap'],
                 python_requires='>=3.6',
                 extras_require={'test': ['pytest']},
                 package_data={'': ['examples/*.py']},
                 scripts=['tools/isowrap'],
)
