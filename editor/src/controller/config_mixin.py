"""Configuration management for SketchController"""

import os
import json
import logging

from constants import (
	DEFAULT_DYNAMIC_GRID_SIZE, DEFAULT_SPACING, HIT_RADIUS, INIT_SYMMETRY,
	MAX_RECENT_FILES,
)
from models.app_state import SymmetryParams
from utils.logger import loggerRaise

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.eschersketch')

DEFAULT_CONFIG = {
	'initial_symmetry': INIT_SYMMETRY,
	'spacing': DEFAULT_SPACING,
	'dynamic_grid_size': DEFAULT_DYNAMIC_GRID_SIZE,
	'hit_radius': HIT_RADIUS,
	'recent_files': [],
}


class ConfigMixin:
	"""Configuration file operations and recent files"""

	def _init_config(self, config_dir=None):
		"""Set up config paths; config_dir None keeps the config in memory only"""
		self.config_dir = config_dir
		self.config_file = os.path.join(config_dir, 'config.json') if config_dir else None
		self.config = dict(DEFAULT_CONFIG)
		self.recent_files = []
		self.max_recent_files = MAX_RECENT_FILES

	def _load_config(self):
		"""Load settings and recent files from config file"""
		try:
			if self.config_file and os.path.exists(self.config_file):
				with open(self.config_file, 'r', encoding='utf-8') as f:
					config = json.load(f)
				for key, default in DEFAULT_CONFIG.items():
					self.config[key] = config.get(key, default)
				# Filter out files that no longer exist
				self.recent_files = [f for f in self.config['recent_files'] if os.path.exists(f)]
		except Exception as e:
			loggerRaise(e, "Error loading config")
		self._apply_config()

	def _apply_config(self):
		"""Push loaded settings into the editor options"""
		options = self.state.options
		options.dynamic_grid_size = bool(self.config['dynamic_grid_size'])
		options.hit_radius = float(self.config['hit_radius'])
		self.state.symmetry = self._default_symmetry()

	def _default_symmetry(self):
		return SymmetryParams(sym=self.config['initial_symmetry'], d=self.config['spacing'])

	def _save_config(self):
		"""Save settings and recent files to config file"""
		if not self.config_file:
			return
		try:
			# Create config directory if it doesn't exist
			os.makedirs(self.config_dir, exist_ok=True)

			config = dict(self.config)
			config['dynamic_grid_size'] = self.state.options.dynamic_grid_size
			config['hit_radius'] = self.state.options.hit_radius
			config['recent_files'] = self.recent_files[:self.max_recent_files]

			with open(self.config_file, 'w', encoding='utf-8') as f:
				json.dump(config, f, indent=2)
		except Exception as e:
			loggerRaise(e, "Error saving config")

	def _add_to_recent_files(self, filepath):
		"""Add a file to the recent files list"""
		# Remove if already in list
		if filepath in self.recent_files:
			self.recent_files.remove(filepath)

		# Add to front of list
		self.recent_files.insert(0, filepath)

		# Trim to max size
		self.recent_files = self.recent_files[:self.max_recent_files]

		self._save_config()

	def _clear_recent_files(self):
		"""Clear the recent files list"""
		self.recent_files = []
		self._save_config()
