"""
fake_node.py — ROS2 Node robot differential drive fake.

Subscribe  : cmd_vel        (geometry_msgs/Twist)
Publish    : joint_states   (sensor_msgs/JointState)
             odom           (nav_msgs/Odometry)
             tf             odom → base_footprint
             imu            (sensor_msgs/Imu)
             sensor_state   (turtlebot3_msgs/SensorState)

Semua task periodik di-drive oleh satu TaskScheduler:
  control → drive_information → sensor_state → imu
"""

import pygame

import rclpy
from rclpy.node import Node
from rclpy.callback_groups import MutuallyExclusiveCallbackGroup, ReentrantCallbackGroup
from rclpy.executors import MultiThreadedExecutor
from rclpy.time import Time
from geometry_msgs.msg import Twist, TransformStamped
from nav_msgs.msg import Odometry
from sensor_msgs.msg import JointState, Imu
from tf2_ros import TransformBroadcaster

from turtlebot3_msgs.msg import SensorState

from diffdrive_fake.objects.robot_config import config_for
from diffdrive_fake.objects.state_records import (
    build_joint_state, build_odometry, build_transform,
    build_sensor_state, build_imu, stamp_nanoseconds,
)
from diffdrive_fake.physics.robot_model import FakeRobotModel
from diffdrive_fake.render.renderer import Renderer
from diffdrive_fake.scheduler import TaskScheduler


# ======================================================================
# FakeRobotNode
# ======================================================================

class FakeRobotNode(Node):
    """ROS2 Node: cmd_vel → fake kinematics → odom / joint_states / tf."""

    def __init__(self):
        super().__init__('diffdrive_fake_node')
        # cmd_vel boleh paralel dengan tick; poll scheduler tidak boleh overlap
        self.callback_group = ReentrantCallbackGroup()
        self.scheduler_group = MutuallyExclusiveCallbackGroup()

        # --- Parameters ---
        self.declare_parameter('robot_model', 'burger')
        self.declare_parameter('cmd_vel_timeout', 1.0)
        self.declare_parameter('clamp_command', False)
        self.declare_parameter('joint_states_frame', 'base_footprint')
        self.declare_parameter('odom_frame', 'odom')
        self.declare_parameter('base_frame', 'base_footprint')
        self.declare_parameter('wheel_left_joint_name', 'left_wheel')
        self.declare_parameter('wheel_right_joint_name', 'right_wheel')
        self.declare_parameter('use_viewer', False)

        p = self._param
        self.config = config_for(
            p('robot_model'),
            cmd_vel_timeout=float(p('cmd_vel_timeout')),
            clamp_command=bool(p('clamp_command')),
            joint_states_frame=p('joint_states_frame'),
            odom_frame=p('odom_frame'),
            base_frame=p('base_frame'),
            joint_names=(p('wheel_left_joint_name'), p('wheel_right_joint_name')),
        )
        self.use_viewer = bool(p('use_viewer'))

        # --- Model ---
        self.model = FakeRobotModel(self.config, start_time=self._now())
        self._was_stale = False

        # --- Publishers / subscribers ---
        cb = self.callback_group
        self.cmd_vel_sub = self.create_subscription(
            Twist, 'cmd_vel', self._cmd_vel_callback, 10, callback_group=cb)

        self.joint_states_pub = self.create_publisher(JointState, 'joint_states', 10)
        self.odom_pub = self.create_publisher(Odometry, 'odom', 10)
        self.imu_pub = self.create_publisher(Imu, 'imu', 10)
        self.sensor_state_pub = self.create_publisher(SensorState, 'sensor_state', 10)
        self.tf_broadcaster = TransformBroadcaster(self)

        # --- Scheduler ---
        tasks = {
            'control': self._control_task,
            'drive_information': self._publish_drive_information,
            'sensor_state': self._publish_sensor_state,
            'imu': self._publish_imu,
        }
        self.scheduler = TaskScheduler()
        for name, period in self.config.periods.as_dict().items():
            self.scheduler.add(name, period, tasks[name])
        self.scheduler.start(self._now())

        self.timer = self.create_timer(
            self.scheduler.base_period, self._scheduler_callback,
            callback_group=self.scheduler_group)

        self.get_logger().info(
            f"FakeRobotNode initialized — model={self.config.model.value}, "
            f"wheel_radius={self.config.wheel_radius}, "
            f"wheel_separation={self.config.wheel_separation}, "
            f"cmd_vel_timeout={self.config.cmd_vel_timeout}s")

    def _param(self, name: str):
        return self.get_parameter(name).value

    def _now(self) -> float:
        return self.get_clock().now().nanoseconds * 1e-9

    def _stamp(self, now: float):
        return Time(nanoseconds=stamp_nanoseconds(now),
                    clock_type=self.get_clock().clock_type).to_msg()

    # ------------------------------------------------------------------
    # Command intake
    # ------------------------------------------------------------------

    def _cmd_vel_callback(self, msg: Twist):
        accepted = self.model.submit(msg.linear.x, msg.angular.z, self._now())
        if not accepted:
            self.get_logger().warn(
                f"Rejected non-finite cmd_vel: linear.x={msg.linear.x}, "
                f"angular.z={msg.angular.z}",
                throttle_duration_sec=1.0)

    # ------------------------------------------------------------------
    # Scheduled tasks
    # ------------------------------------------------------------------

    def _scheduler_callback(self):
        self.scheduler.poll(self._now())

    def _control_task(self, now: float):
        self.model.tick(now)

        stale = self.model.stale
        if stale and not self._was_stale:
            self.get_logger().info(
                f"cmd_vel timeout ({self.config.cmd_vel_timeout:.2f}s), stopping robot")
        elif not stale and self._was_stale:
            self.get_logger().info("cmd_vel resumed")
        self._was_stale = stale

    def _publish_drive_information(self, now: float):
        pose, wheels = self.model.snapshot()
        stamp = self._stamp(now)

        # Joint states
        js_rec = build_joint_state(wheels, self.config.joint_names)
        js = JointState()
        js.header.stamp = stamp
        js.header.frame_id = self.config.joint_states_frame
        js.name = js_rec.names
        js.position = js_rec.positions
        js.velocity = js_rec.velocities
        self.joint_states_pub.publish(js)

        # Odometry
        odom_rec = build_odometry(pose, wheels, self.model.kinematics,
                                  self.config.odom_frame, self.config.base_frame)
        odom = Odometry()
        odom.header.stamp = stamp
        odom.header.frame_id = odom_rec.frame_id
        odom.child_frame_id = odom_rec.child_frame_id
        odom.pose.pose.position.x = odom_rec.x
        odom.pose.pose.position.y = odom_rec.y
        (odom.pose.pose.orientation.x, odom.pose.pose.orientation.y,
         odom.pose.pose.orientation.z, odom.pose.pose.orientation.w) = odom_rec.orientation
        odom.twist.twist.linear.x = odom_rec.linear_x
        odom.twist.twist.angular.z = odom_rec.angular_z
        self.odom_pub.publish(odom)

        # TF odom → base_footprint
        tf_rec = build_transform(pose, self.config.odom_frame, self.config.base_frame)
        tf = TransformStamped()
        tf.header.stamp = stamp
        tf.header.frame_id = tf_rec.frame_id
        tf.child_frame_id = tf_rec.child_frame_id
        (tf.transform.translation.x, tf.transform.translation.y,
         tf.transform.translation.z) = tf_rec.translation
        (tf.transform.rotation.x, tf.transform.rotation.y,
         tf.transform.rotation.z, tf.transform.rotation.w) = tf_rec.rotation
        self.tf_broadcaster.sendTransform(tf)

    def _publish_sensor_state(self, now: float):
        rec = build_sensor_state(self.model.wheels, self.config)
        msg = SensorState()
        msg.header.stamp = self._stamp(now)
        msg.left_encoder = rec.left_encoder
        msg.right_encoder = rec.right_encoder
        msg.torque = rec.torque
        self.sensor_state_pub.publish(msg)

    def _publish_imu(self, now: float):
        rec = build_imu(self.model.pose, self.model.effective_command)
        msg = Imu()
        msg.header.stamp = self._stamp(now)
        msg.header.frame_id = 'imu_link'
        (msg.orientation.x, msg.orientation.y,
         msg.orientation.z, msg.orientation.w) = rec.orientation
        msg.angular_velocity.z = rec.angular_velocity_z
        (msg.linear_acceleration.x, msg.linear_acceleration.y,
         msg.linear_acceleration.z) = rec.linear_acceleration
        self.imu_pub.publish(msg)

    # ------------------------------------------------------------------
    # Main loop (viewer)
    # ------------------------------------------------------------------

    def run(self):
        """Loop pygame + spin_once. Dipakai jika parameter use_viewer=True."""
        renderer = Renderer(self.config)
        running = True

        keybindings = [
            "T:trail  C:clear trail",
            "F:follow robot  W:wheel speeds",
            "BACKSPACE:quit",
        ]

        while running and rclpy.ok():
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_key(renderer, event.key, running)

            # ROS spin
            rclpy.spin_once(self, timeout_sec=0.001)

            pose, wheels = self.model.snapshot()
            stale = self.model.stale
            cmd = self.model.command

            renderer.record_pose(pose)
            renderer.clear()
            renderer.draw_grid()
            renderer.draw_trail()
            renderer.draw_robot(pose, wheels, stale=stale)
            renderer.draw_sidebar(
                pose=pose,
                wheels=wheels,
                command=(cmd.linear_x, cmd.angular_z),
                effective=self.model.effective_command,
                stale=stale,
                extra_lines=keybindings,
            )
            renderer.flip(fps=60)

        pygame.quit()

    def _handle_key(self, renderer, key, running: bool) -> bool:
        if key == pygame.K_BACKSPACE:
            return False
        elif key == pygame.K_t:
            renderer.show_trail = not renderer.show_trail
        elif key == pygame.K_c:
            renderer.clear_trail()
        elif key == pygame.K_f:
            renderer.follow_robot = not renderer.follow_robot
            if renderer.follow_robot:
                pose = self.model.pose
                renderer.fc.set_center(pose.x, pose.y)
        elif key == pygame.K_w:
            renderer.show_wheel_speeds = not renderer.show_wheel_speeds
        return running


# ======================================================================
# Entry point
# ======================================================================

def main(args=None):
    rclpy.init(args=args)
    node = None
    try:
        node = FakeRobotNode()
        node.get_logger().info("Starting fake robot...")
        if node.use_viewer:
            node.run()
        else:
            executor = MultiThreadedExecutor()
            executor.add_node(node)
            executor.spin()
    except KeyboardInterrupt:
        pass
    finally:
        if node is not None:
            node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()


if __name__ == '__main__':
    main()
