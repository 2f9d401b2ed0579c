"""
Reset the study planner's stats (streak, last study day, focus minutes).
Optionally also clears the To-Do list.
"""

from BackEnd.core.config import AppConfig
from BackEnd.core.paths import store_dir
from BackEnd.repos.store import JsonFileStore, STATS_KEY
from BackEnd.repos.task_repo import TaskRepository
from BackEnd.services.stats_service import StatsTracker

def reset_all_stats(config=None, ask=input):
    """Reset stats after confirmation; offer to clear tasks too. Returns what was reset."""
    config = config or AppConfig.from_env()
    store = JsonFileStore(store_dir(config.data_dir))
    done = []

    if store.get(STATS_KEY) is None:
        print("No stats found. Stats are already at 0.")
    else:
        print(f"Found stats in: {store.path(STATS_KEY)}")
        confirm = ask("Are you sure you want to reset all stats? This cannot be undone. (yes/no): ")
        if confirm.lower() in ['yes', 'y']:
            StatsTracker(store, on_warning=print).reset()
            print("✓ All stats have been reset to 0")
            done.append("stats")
        else:
            print("Reset cancelled.")

    tasks = TaskRepository(store, on_warning=print)
    if tasks.count:
        confirm_todos = ask(f"\nAlso delete your To-Do list ({tasks.count} tasks)? (yes/no): ")
        if confirm_todos.lower() in ['yes', 'y']:
            tasks.clear()
            print("✓ To-Do list deleted successfully!")
            done.append("tasks")
    return done

if __name__ == "__main__":
    print("=" * 50)
    print("Study Planner - Reset All Stats")
    print("=" * 50)
    reset_all_stats()
    print("\nPress Enter to exit...")
    input()
