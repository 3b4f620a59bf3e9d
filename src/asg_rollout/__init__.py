"""ASG Rollout - rolling replacement of stale Auto Scaling Group instances.

Instances whose launch configuration no longer matches the group's active
launch configuration are terminated in paced batches. The Auto Scaling Group
itself launches the replacements; desired capacity is never changed.

Key Components:
    - domain: Group snapshots, instance records, outcomes and ports
    - application: Inspector, freshness guard, batch planner, orchestrator
    - providers: AWS Auto Scaling adapter built on boto3
    - config: Rollout configuration schema and loader
    - cli: Command-line interface

Usage:
    >>> asg-rollout apply --asg-name web-asg --batch-size 4 --pause-time 30s
"""

__version__ = "0.1.0"
