JOB_LOG_PREFIX = "logrelay:job_log"
