"""
Task subsystem.

Components:
- task_models.py: task variants (Todo, Deadline, Event) + date formats
- task_list.py: ordered, 1-based task collection
- task_store.py: flat-file record codec + TaskStore
"""
