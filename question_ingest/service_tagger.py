"""
Keyword tagging of questions by AWS service.
"""

from typing import Iterable, Sequence

from .data_models import Option, QuestionRecord


FALLBACK_TAG = "General"

# Order matters: the first entry found wins.
SERVICE_VOCABULARY: Sequence[str] = (
    "EC2", "S3", "RDS", "VPC", "ELB", "Auto Scaling", "CloudFormation",
    "Lambda", "DynamoDB", "SNS", "SQS", "CloudWatch", "IAM", "Route 53",
    "CloudFront", "EFS", "EBS", "Glacier", "Kinesis", "EMR", "Redshift",
    "ElastiCache", "API Gateway", "CodeDeploy", "CodePipeline", "ECS",
    "EKS", "Fargate", "Step Functions", "SageMaker", "GuardDuty", "Shield",
    "WAF", "KMS", "Secrets Manager", "Systems Manager", "CloudTrail",
)


def detect_service(
    question_text: str,
    options: Iterable[Option],
    vocabulary: Sequence[str] = SERVICE_VOCABULARY,
) -> str:
    """
    Return the first vocabulary entry mentioned in a question.

    The question and option texts are joined and uppercased; an entry matches
    when it appears either as written ("ROUTE 53") or with its whitespace
    removed ("ROUTE53").

    Examples:
        >>> detect_service("What is S3 used for?", [Option("Object storage")])
        'S3'
    """
    haystack = " ".join([question_text] + [o.text for o in options]).upper()
    for service in vocabulary:
        name = service.upper()
        if name in haystack or "".join(name.split()) in haystack:
            return service
    return FALLBACK_TAG


def tag_record(record: QuestionRecord, vocabulary: Sequence[str] = SERVICE_VOCABULARY) -> QuestionRecord:
    record.aws_service = detect_service(record.question_text, record.options, vocabulary)
    return record
