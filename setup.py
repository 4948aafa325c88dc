from setuptools import setup, find_packages

package_name = 'diffdrive_fake'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
    ],
    install_requires=['setuptools', 'numpy', 'pygame'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='shluf',
    maintainer_email='luthfisalis09@gmail.com',
    description='Robot differential drive fake (TurtleBot3) dengan ROS2 dan viewer Pygame',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'fake_node = diffdrive_fake.fake_node:main',
        ],
    },
)
