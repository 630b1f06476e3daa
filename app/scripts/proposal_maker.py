#!/usr/bin/env python3
"""Proposal maker script.

Usage:
    python -m app.scripts.proposal_maker --client "Acme" --budget 8000 brief.pdf notes.md
    python -m app.scripts.proposal_maker --client "Acme" --budget 8000 --sow -o out/ brief.docx
"""

import argparse
import asyncio
import sys
import time
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proposal-maker",
        description="고객 브리프 파일을 분석해 견적 제안서(JSON/Markdown/CSV)를 만듭니다.",
    )
    parser.add_argument("files", nargs="*", type=Path, help="브리프 파일 (txt, md, pdf, docx)")
    parser.add_argument("--client", required=True, help="고객사명")
    parser.add_argument("--budget", required=True, help="예산 (예: 8000)")
    parser.add_argument("--project-type", default=None, help="프로젝트 유형")
    parser.add_argument("--context", default=None, help="추가 설명")
    parser.add_argument("--sow", action="store_true", help="SOW 문서도 생성")
    parser.add_argument(
        "-o", "--output-dir", type=Path, default=Path("workspace/outputs/proposals"),
        help="결과 저장 폴더",
    )
    return parser


async def main(args: argparse.Namespace):
    from app.models import DocumentType, ProposalContext
    from app.services.catalog_store import get_catalog_store
    from app.services.claude_client import get_claude_client
    from app.services.text_extractor import frame_documents, get_text_extractor
    from app.utils.validation import validate_analysis_inputs
    from app.layers.layer1_suggestion import BriefAnalyzer, BriefMaterials
    from app.layers.layer2_reconciliation import ProposalReconciler
    from app.layers.layer4_documents import DocumentGenerator, DocumentRequest

    client_name, budget = validate_analysis_inputs(args.client, args.budget)

    print('\n' + '=' * 70)
    print(f'제안서 생성 시작 - {client_name} (예산 ${budget:,.0f})')
    print(f'시작 시간: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    print('=' * 70)

    output_dir = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    client = get_claude_client()
    catalog = get_catalog_store()
    extractor = get_text_extractor()
    total_start = time.time()

    # 1. 텍스트 추출
    print('\n' + '-' * 70)
    print('[1] 텍스트 추출')
    print('-' * 70)

    documents = []
    for i, file_path in enumerate(args.files, 1):
        doc = extractor.extract(file_path.read_bytes(), file_path.name, document_id=f'doc-{i:03d}')
        documents.append(doc)
        status = f'{len(doc.extracted_text)} chars' if doc.has_text else '텍스트 없음 (제외)'
        print(f'  [{i}/{len(args.files)}] {file_path.name}: {status}')

    # 2. 브리프 분석
    print('\n' + '-' * 70)
    print('[2] 브리프 분석')
    print('-' * 70)

    context = ProposalContext(
        client_name=client_name,
        budget=budget,
        project_type=args.project_type,
        additional_context=args.context,
    )
    materials = BriefMaterials(
        documents=frame_documents(documents),
        packages=catalog.get_packages(),
        services_by_category=catalog.services_by_category(),
    )
    suggestion = await BriefAnalyzer(client).generate(context, materials)

    if suggestion.degraded:
        print('  AI 응답을 해석하지 못해 커스텀 빌드 기본값으로 진행합니다.')
    elif suggestion.use_packages:
        print(f'  추천 패키지: {", ".join(p.name or p.package_id or "?" for p in suggestion.packages)}')
    else:
        roles = suggestion.custom_build.roles if suggestion.custom_build else []
        print(f'  커스텀 빌드 역할: {len(roles)}개')

    # 3. 카탈로그 병합
    print('\n' + '-' * 70)
    print('[3] 제안서 구성')
    print('-' * 70)

    proposal = ProposalReconciler().reconcile(
        suggestion, catalog.get_services(), catalog.get_packages(), context
    )
    for phase in proposal.phases:
        print(f'  {phase.name}: {len(phase.line_items)}개 항목, ${phase.total_cost:,.2f}')

    # 저장
    base = output_dir / proposal.id
    base.with_suffix('.json').write_text(proposal.model_dump_json(indent=2, by_alias=True), encoding='utf-8')
    base.with_suffix('.md').write_text(proposal.to_markdown(), encoding='utf-8')
    base.with_suffix('.csv').write_text(proposal.to_csv(), encoding='utf-8')

    # 4. SOW (선택)
    if args.sow:
        print('\n' + '-' * 70)
        print('[4] SOW 생성')
        print('-' * 70)

        request = DocumentRequest(document_type=DocumentType.SOW, client_name=client_name, budget=budget)
        document = await DocumentGenerator(client).generate(proposal, request)
        sow_path = output_dir / f'{proposal.id}-sow.md'
        sow_path.write_text(document.content, encoding='utf-8')
        print(f'  SOW 저장: {sow_path}')

    total_time = time.time() - total_start

    print('\n' + '=' * 70)
    print('제안서 생성 완료')
    print('=' * 70)
    print(f'\n  제안서 ID: {proposal.id}')
    print(f'  단계: {len(proposal.phases)}개, 항목: {proposal.line_item_count}개')
    print(f'  합계: ${proposal.total:,.2f} (예산 ${budget:,.2f})')
    print(f'  총 소요시간: {total_time:.1f}초')
    print(f'\n저장 위치: {base}.json / .md / .csv')

    return proposal


def run():
    """콘솔 스크립트 진입점 (proposal-maker)."""
    args = build_parser().parse_args()
    asyncio.run(main(args))


if __name__ == "__main__":
    run()
