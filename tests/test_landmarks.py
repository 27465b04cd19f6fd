"""
Test cases for landmarks, poses and the geometry helpers.
"""
import math
import unittest
from types import SimpleNamespace

import numpy as np

from gesture_art.geometry import distance_2d, distance_ratios, distances_from, hand_center, hand_span
from gesture_art.models import HandLandmark, HandPose, Landmark, LandmarkGroups, MalformedPoseError

from .helpers import WRIST, span_pose


class TestHandPose(unittest.TestCase):
    """Test building and validating poses."""

    def test_from_points_accepts_2d_and_3d(self):
        points = [(0.1, 0.2)] * 20 + [(0.3, 0.4, -0.05)]
        pose = HandPose.from_points(points)

        self.assertEqual(len(pose), 21)
        self.assertEqual(pose[0], Landmark(0.1, 0.2, 0.0))
        self.assertEqual(pose[HandLandmark.PINKY_TIP], Landmark(0.3, 0.4, -0.05))

    def test_wrong_count_is_rejected(self):
        with self.assertRaises(MalformedPoseError):
            HandPose.from_points([(0.5, 0.5)] * 20)
        with self.assertRaises(MalformedPoseError):
            HandPose.from_points([(0.5, 0.5)] * 22)

    def test_wrong_arity_is_rejected(self):
        points = [(0.5, 0.5)] * 21
        points[7] = (0.5,)
        with self.assertRaises(MalformedPoseError):
            HandPose.from_points(points)

    def test_non_numeric_is_rejected(self):
        points: list = [(0.5, 0.5)] * 21
        points[3] = ("a", 0.5)
        with self.assertRaises(MalformedPoseError):
            HandPose.from_points(points)

    def test_scalar_points_are_rejected(self):
        for points in ([0.5] * 21, [None] * 21, np.zeros(21)):
            with self.subTest(points=type(points[0]).__name__):
                with self.assertRaises(MalformedPoseError):
                    HandPose.from_points(points)

    def test_malformed_pose_is_a_value_error(self):
        self.assertTrue(issubclass(MalformedPoseError, ValueError))

    def test_from_mediapipe(self):
        landmarks = [SimpleNamespace(x=i / 21, y=0.5, z=0.01 * i) for i in range(21)]
        pose = HandPose.from_mediapipe(landmarks)

        self.assertAlmostEqual(pose[HandLandmark.INDEX_FINGER_TIP].x, 8 / 21)
        self.assertAlmostEqual(pose[HandLandmark.INDEX_FINGER_TIP].z, 0.08)

    def test_xy_array(self):
        pose = span_pose()
        self.assertEqual(pose.xy.shape, (21, 2))
        np.testing.assert_allclose(pose.xy[HandLandmark.WRIST], pose[HandLandmark.WRIST].xy)

    def test_to_list(self):
        pose = HandPose.from_points([(0.5, 0.25, 0.1)] * 21)
        self.assertEqual(pose.to_list()[0], [0.5, 0.25, 0.1])


class TestGeometry(unittest.TestCase):
    """Test distances between landmarks."""

    def test_distance_ignores_depth(self):
        a = Landmark(0.0, 0.0, 5.0)
        b = Landmark(0.3, 0.4, -5.0)
        self.assertAlmostEqual(distance_2d(a, b), 0.5)

    def test_distances_from(self):
        points = [WRIST] * 21
        points[HandLandmark.INDEX_FINGER_TIP] = (WRIST[0], WRIST[1] - 0.3)
        points[HandLandmark.PINKY_TIP] = (WRIST[0] + 0.4, WRIST[1])
        pose = HandPose.from_points(points)

        distances = distances_from(
            pose, HandLandmark.WRIST, (HandLandmark.INDEX_FINGER_TIP, HandLandmark.PINKY_TIP)
        )
        np.testing.assert_allclose(distances, [0.3, 0.4])

    def test_distance_ratios(self):
        points = [WRIST] * 21
        for tip, mcp in zip(LandmarkGroups.FINGER_TIPS, LandmarkGroups.FINGER_MCPS):
            points[mcp] = (WRIST[0], WRIST[1] - 0.1)
            points[tip] = (WRIST[0], WRIST[1] - 0.05)
        pose = HandPose.from_points(points)

        ratios = distance_ratios(pose, LandmarkGroups.FINGER_TIPS, LandmarkGroups.FINGER_MCPS)
        for ratio in ratios:
            self.assertAlmostEqual(ratio, 0.5)

    def test_distance_ratios_with_base_on_origin(self):
        points = [WRIST] * 21
        points[HandLandmark.INDEX_FINGER_TIP] = (0.1, 0.1)
        pose = HandPose.from_points(points)

        ratios = distance_ratios(
            pose,
            (HandLandmark.INDEX_FINGER_TIP, HandLandmark.MIDDLE_FINGER_TIP),
            (HandLandmark.INDEX_FINGER_MCP, HandLandmark.MIDDLE_FINGER_MCP),
        )
        self.assertEqual(ratios, [math.inf, 1.0])

    def test_distance_ratios_length_mismatch(self):
        with self.assertRaises(ValueError):
            distance_ratios(span_pose(), LandmarkGroups.FINGER_TIPS, LandmarkGroups.FINGER_MCPS[:2])

    def test_hand_center_and_span(self):
        pose = span_pose(center=(0.3, 0.6), span=0.2)
        center = hand_center(pose)
        self.assertAlmostEqual(center[0], 0.3)
        self.assertAlmostEqual(center[1], 0.6)
        self.assertAlmostEqual(hand_span(pose), 0.2)


if __name__ == "__main__":
    unittest.main()
