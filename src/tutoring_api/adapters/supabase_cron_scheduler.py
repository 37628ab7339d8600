"""Supabase RPC wrapper for pg_cron scheduling."""

from dataclasses import dataclass

from supabase import Client

from tutoring_api.adapters.supabase_errors import store_errors
from tutoring_api.services.automation import CronScheduler


@dataclass
class SupabaseCronScheduler(CronScheduler):
    """Calls the `cron_schedule` / `cron_unschedule` database functions."""

    client: Client

    def unschedule(self, job_name: str) -> None:
        with store_errors("unschedule cron job"):
            self.client.rpc("cron_unschedule", {"p_jobname": job_name}).execute()

    def schedule(self, job_name: str, schedule: str, command: str) -> None:
        with store_errors("schedule cron job"):
            self.client.rpc(
                "cron_schedule",
                {
                    "p_jobname": job_name,
                    "p_schedule": schedule,
                    "p_command": command,
                },
            ).execute()
