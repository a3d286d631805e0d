"""
Undo/Redo History Stack for Eschersketch

Holds committed drawing operations in commit order plus a redo stack in undo
order. Entries below the floor (startup content) can never be undone.
"""

import logging

logger = logging.getLogger('History')


class HistoryStack:
	"""Committed operations, redo stack and undo floor"""

	def __init__(self):
		self.entries = []  # Committed operations, oldest first
		self.redo_entries = []  # Undone operations, last undone at the end
		self.floor = 0  # History length once startup content is loaded
		self._listeners = []  # Callbacks to notify on state changes

	def push(self, op):
		"""
		Append a committed operation

		Args:
			op: DrawOperation to append (already stamped with style/symmetry)
		"""
		self.entries.append(op)
		self._notify_listeners()
		logger.debug(f"Pushed {op.tool.value} (total: {len(self.entries)})")

	def pop(self):
		"""
		Remove and return the newest entry

		Returns:
			DrawOperation, or None if the history is empty
		"""
		if not self.entries:
			return None
		op = self.entries.pop()
		self._notify_listeners()
		logger.debug(f"Popped {op.tool.value} (total: {len(self.entries)})")
		return op

	def push_redo(self, op):
		self.redo_entries.append(op)
		self._notify_listeners()

	def pop_redo(self):
		"""Remove and return the most recently undone entry, or None"""
		if not self.redo_entries:
			return None
		op = self.redo_entries.pop()
		self._notify_listeners()
		return op

	def mark_floor(self):
		"""Freeze the current history length as the undo floor"""
		self.floor = len(self.entries)
		logger.debug(f"Undo floor at {self.floor}")

	def above_floor(self):
		"""Check if the newest entry can be undone"""
		return len(self.entries) > self.floor

	def can_undo(self):
		return self.above_floor()

	def can_redo(self):
		return len(self.redo_entries) > 0

	def replace(self, entries):
		"""
		Replace the whole history, used when loading a sketch

		Args:
			entries: Iterable of DrawOperation in commit order
		"""
		self.entries = list(entries)
		self.redo_entries = []
		self.floor = 0
		self._notify_listeners()
		logger.debug(f"History replaced ({len(self.entries)} entries)")

	def clear(self):
		"""Clear both stacks and the floor"""
		self.entries = []
		self.redo_entries = []
		self.floor = 0
		self._notify_listeners()
		logger.debug("History cleared")

	def has_shape(self, shape_id):
		"""Check if any committed entry belongs to shape_id"""
		return any(op.shape_id == shape_id for op in self.entries)

	def visible_ops(self, exclude_shape=None):
		"""
		Entries that a full replay draws, in commit order

		Checkpoints of a multi-click shape are superseded by the newest entry
		with the same shape_id; ops belonging to exclude_shape are skipped.

		Args:
			exclude_shape: shape_id currently being edited live (optional)

		Returns:
			List of DrawOperation
		"""
		last_index = {}
		for index, op in enumerate(self.entries):
			last_index[op.shape_id] = index

		return [op for index, op in enumerate(self.entries)
				if last_index[op.shape_id] == index and op.shape_id != exclude_shape]

	def add_listener(self, callback):
		"""
		Add a listener to be notified when history state changes

		Args:
			callback: Function to call when history changes (receives can_undo, can_redo)
		"""
		self._listeners.append(callback)

	def remove_listener(self, callback):
		"""Remove a listener"""
		if callback in self._listeners:
			self._listeners.remove(callback)

	def _notify_listeners(self):
		"""Notify all listeners of history state change"""
		for callback in self._listeners:
			try:
				callback(self.can_undo(), self.can_redo())
			except Exception:
				logger.exception("Error notifying history listener")

	def __len__(self):
		return len(self.entries)
