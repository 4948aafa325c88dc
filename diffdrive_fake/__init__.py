"""
diffdrive_fake - Robot differential drive fake (TurtleBot3) untuk ROS2.

Package ini memisahkan 3 layer utama:
  1. Physics        → command intake + integrator kinematik (meter, radian)
  2. ROS2 Interface → cmd_vel, odom, joint_states, tf, imu, sensor_state
  3. Renderer       → viewer Pygame opsional
"""
