from wlim.accessibility.collector import AccessibilityCollector
from wlim.accessibility.views import Target, WindowGroup
from wlim.config import CONFIG, HintSettings
from wlim.geometry.normalizer import GeometryNormalizer
from wlim.hints.labels import assign_labels, generate_labels
from wlim.hints.matcher import KeystrokeMatcher
from wlim.session.service import HintSession
from wlim.session.views import CompositorUnavailableError, NoTargetsFoundError, WlimError

__all__ = [
	'AccessibilityCollector',
	'Target',
	'WindowGroup',
	'CONFIG',
	'HintSettings',
	'GeometryNormalizer',
	'assign_labels',
	'generate_labels',
	'KeystrokeMatcher',
	'HintSession',
	'CompositorUnavailableError',
	'NoTargetsFoundError',
	'WlimError',
]
